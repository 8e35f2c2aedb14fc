"""HTTP 头常量."""


class HttpHeaders:
    """常用 HTTP 头名称."""

    CONTENT_TYPE = "Content-Type"
    AUTHORIZATION = "Authorization"
    X_REQUEST_ID = "X-Request-ID"
