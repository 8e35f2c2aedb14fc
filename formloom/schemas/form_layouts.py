"""表单布局 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator, model_validator

from formloom.constants import CREATABLE_LAYOUT_TYPES
from formloom.schemas._common import require_fields, strip_optional_text
from formloom.schemas.base import PayloadSchema
from formloom.schemas.fields import FieldList, dump_fields
from formloom.schemas.validation import INVALID_ENUM_KEY, SchemaMessageKeyError


class FormLayoutCreatePayload(PayloadSchema):
    """创建表单布局 payload.

    layoutType 创建时仅接受 form-group / box-layout.
    """

    layout_name: StrictStr = Field(alias="layoutName")
    layout_type: StrictStr = Field(alias="layoutType")
    category: str | None = None
    fields: FieldList = Field(default_factory=list)
    layout_config: Any = Field(default=None, alias="layoutConfig")

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("layoutName", "layoutType"))

    @field_validator("layout_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("layout_type", mode="before")
    @classmethod
    def _validate_layout_type(cls, value: Any) -> Any:
        if value not in CREATABLE_LAYOUT_TYPES:
            raise SchemaMessageKeyError(
                f"layoutType 仅支持 {' / '.join(CREATABLE_LAYOUT_TYPES)}",
                message_key=INVALID_ENUM_KEY,
                field="layoutType",
            )
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _strip_category(cls, value: Any) -> Any:
        return strip_optional_text(value)

    @field_validator("fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_document(self) -> dict[str, Any]:
        return {
            "layoutName": self.layout_name,
            "layoutType": self.layout_type,
            "category": self.category,
            "fields": dump_fields(self.fields),
            "layoutConfig": self.layout_config,
        }


class FormLayoutUpdatePayload(PayloadSchema):
    """更新表单布局 payload.

    仅 layoutName/category/fields/layoutConfig 可更新, layoutType 等其余键静默忽略.
    - layoutName: 非空时才更新
    - category/layoutConfig: 只要出现在 payload 中即覆盖(允许置空)
    - fields: 非空值时才更新
    """

    layout_name: str | None = Field(default=None, alias="layoutName")
    category: str | None = None
    fields: FieldList | None = None
    layout_config: Any = Field(default=None, alias="layoutConfig")

    @field_validator("layout_name", "category", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return strip_optional_text(value)

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if self.layout_name:
            changes["layoutName"] = self.layout_name
        if "category" in self.model_fields_set:
            changes["category"] = self.category
        if self.fields is not None:
            changes["fields"] = dump_fields(self.fields)
        if "layout_config" in self.model_fields_set:
            changes["layoutConfig"] = self.layout_config
        return changes


__all__ = ["FormLayoutCreatePayload", "FormLayoutUpdatePayload"]
