"""LOV(list of values)条目与选项 schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from formloom.constants import LovStatus, LovType
from formloom.schemas.validation import INVALID_ENUM_KEY, SchemaMessageKeyError


class OptionItem(BaseModel):
    """选择类字段的单个选项."""

    model_config = ConfigDict(extra="ignore")

    value: str | int | float | bool
    label: str
    disabled: bool | None = None


class LovItem(BaseModel):
    """自定义字段上维护的 LOV 条目.

    `code` 作为选项值, `shortName` 作为展示文案; 未提供 status 时视为 Active.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str = Field(min_length=1)
    short_name: str = Field(alias="shortName")
    description: str | None = None
    seamless_mapping: str | None = Field(default=None, alias="seamlessMapping")
    status: str = LovStatus.ACTIVE.value

    @field_validator("status", mode="before")
    @classmethod
    def _validate_status(cls, value: Any) -> Any:
        if value is None:
            return LovStatus.ACTIVE.value
        allowed = {member.value for member in LovStatus}
        if not isinstance(value, str) or value not in allowed:
            raise SchemaMessageKeyError(
                f"status 仅支持 {'/'.join(sorted(allowed))}",
                message_key=INVALID_ENUM_KEY,
            )
        return value

    @property
    def is_active(self) -> bool:
        return self.status == LovStatus.ACTIVE.value

    def to_option(self) -> OptionItem:
        """投影为 {value: code, label: shortName}."""
        return OptionItem(value=self.code, label=self.short_name)


def validate_lov_type(value: Any) -> Any:
    """校验 lovType 取值, 空值视为未设置."""
    if value is None or value == "":
        return None
    allowed = {member.value for member in LovType}
    if not isinstance(value, str) or value not in allowed:
        raise SchemaMessageKeyError(
            f"lovType 仅支持 {'/'.join(sorted(allowed))}",
            message_key=INVALID_ENUM_KEY,
        )
    return value


__all__ = ["LovItem", "OptionItem", "validate_lov_type"]
