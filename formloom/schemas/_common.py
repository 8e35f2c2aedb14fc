"""schema 之间共享的校验片段."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from formloom.schemas.validation import SchemaMessageKeyError

REQUIRED_KEY = "MISSING_REQUIRED_FIELDS"


def ensure_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("参数格式错误")
    return data


def require_fields(data: Any, *, required: tuple[str, ...]) -> Any:
    """检查必填字段: None 与空白字符串均视为缺失."""
    mapping = ensure_mapping(data)
    for field in required:
        value = mapping.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise SchemaMessageKeyError(f"{field}不能为空", message_key=REQUIRED_KEY, field=field)
    return data


def strip_required_text(value: str, *, field: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise SchemaMessageKeyError(f"{field}不能为空", message_key=REQUIRED_KEY, field=field)
    return cleaned


def strip_optional_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value
