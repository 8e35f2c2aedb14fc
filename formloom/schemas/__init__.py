"""请求/定义 schema(pydantic)."""
