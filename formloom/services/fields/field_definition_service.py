"""字段定义校验与序列化.

纯函数, 不访问存储. 校验失败抛出 ValidationError, `extra["field"]` 指明出错属性.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from formloom.schemas.fields import FIELD_ADAPTER, FIELD_INVALID_KEY, FIELD_LIST_ADAPTER, dump_field, dump_fields
from formloom.schemas.validation import validate_or_raise


def validate_field_definition(raw: object) -> Any:
    """把原始 JSON 校验为字段定义(按 type 判别的联合类型).

    Raises:
        ValidationError: type 未知、缺少种类必需属性或表格列嵌套表格时.

    """
    return validate_or_raise(FIELD_ADAPTER, raw, message_key=FIELD_INVALID_KEY)


def validate_field_list(raw_list: object) -> list[Any]:
    """校验一个字段列表, 并拒绝列表内重复的 id."""
    return validate_or_raise(FIELD_LIST_ADAPTER, raw_list, message_key=FIELD_INVALID_KEY)


def serialize_field_definition(field: BaseModel) -> dict[str, Any]:
    """序列化为 camelCase JSON, 未设置的可选属性不输出."""
    return dump_field(field)


def serialize_field_list(fields: Sequence[BaseModel]) -> list[dict[str, Any]]:
    return dump_fields(fields)


__all__ = [
    "serialize_field_definition",
    "serialize_field_list",
    "validate_field_definition",
    "validate_field_list",
]
