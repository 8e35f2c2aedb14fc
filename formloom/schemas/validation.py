"""Schema 校验与错误映射."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError as PydanticValidationError

from formloom.constants import FieldKind
from formloom.errors import InvalidEnumError, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

INVALID_ENUM_KEY = "INVALID_ENUM"
_TAG_ERROR_TYPES = frozenset({"union_tag_invalid", "union_tag_not_found"})


class SchemaMessageKeyError(ValueError):
    """用于从 schema validator 透传 message_key 与出错字段的错误类型."""

    def __init__(self, message: str, *, message_key: str, field: str | None = None) -> None:
        """构造错误并携带 message_key."""
        super().__init__(message)
        self.message_key = message_key
        self.field = field


def validate_or_raise(
    model: type[ModelT] | TypeAdapter[Any],
    payload: object,
    *,
    message_key: str | None = None,
    message_key_by_field: Mapping[str, str] | None = None,
) -> Any:
    """执行 schema 校验并抛出项目的 ValidationError.

    枚举类字段校验失败(message_key=INVALID_ENUM)时抛出 InvalidEnumError.
    出错字段路径写入 `extra["field"]`.

    Args:
        model: pydantic model 或 TypeAdapter(用于判别联合类型).
        payload: 待校验的 payload.
        message_key: 默认 message_key, 当无法按字段映射时使用.
        message_key_by_field: 按字段映射 message_key 的字典.

    """
    try:
        if isinstance(model, TypeAdapter):
            return model.validate_python(payload)
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        message, field, schema_message_key = _extract_first_error(exc)
        resolved_key = schema_message_key or message_key
        if field and message_key_by_field:
            resolved_key = message_key_by_field.get(field, resolved_key)
        extra = {"field": field} if field else None
        if resolved_key == INVALID_ENUM_KEY:
            raise InvalidEnumError(message, extra=extra) from None
        raise ValidationError(message, message_key=resolved_key, extra=extra) from None


def format_loc(loc: tuple[int | str, ...]) -> str | None:
    """将 pydantic 的 loc 转为点分路径.

    判别联合会把 tag 值作为一层 loc 插入(如 ``("dropdown", "options")``),
    这里将其剔除,只保留真实的属性路径.
    """
    kinds = FieldKind.values()
    parts: list[str] = []
    for item in loc:
        if isinstance(item, str) and item in kinds:
            continue
        parts.append(str(item))
    return ".".join(parts) or None


def _extract_first_error(exc: PydanticValidationError) -> tuple[str, str | None, str | None]:
    errors = exc.errors()
    if not errors:
        return "参数校验失败", None, None

    first = errors[0]
    loc = first.get("loc")
    field = format_loc(loc) if isinstance(loc, tuple) else None
    if first.get("type") in _TAG_ERROR_TYPES:
        field = ".".join(part for part in (field, "type") if part)

    ctx = first.get("ctx")
    if isinstance(ctx, dict) and "error" in ctx:
        raw_error = ctx.get("error")
        if isinstance(raw_error, SchemaMessageKeyError):
            if raw_error.field and not (field or "").endswith(raw_error.field):
                field = ".".join(part for part in (field, raw_error.field) if part)
            return str(raw_error), field, raw_error.message_key
        if isinstance(raw_error, BaseException):
            return _with_field(str(raw_error), field), field, None

    msg = first.get("msg")
    if isinstance(msg, str) and msg.strip():
        return _with_field(msg, field), field, None

    return "参数校验失败", field, None


def _with_field(message: str, field: str | None) -> str:
    if not field or field in message:
        return message
    return f"{field}: {message}"
