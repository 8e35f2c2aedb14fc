"""模板 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator, model_validator

from formloom.schemas._common import require_fields, strip_optional_text
from formloom.schemas.base import PayloadSchema
from formloom.schemas.fields import FieldList, dump_fields


class TemplateCreatePayload(PayloadSchema):
    """创建模板 payload."""

    name: StrictStr
    description: str | None = None
    category: StrictStr
    fields: FieldList = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("name", "category"))

    @field_validator("name", "category")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, value: Any) -> Any:
        return strip_optional_text(value)

    @field_validator("fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "fields": dump_fields(self.fields),
        }


class TemplateUpdatePayload(PayloadSchema):
    """更新模板 payload.

    仅 name/description/category/fields 可更新:
    name/category 非空时才更新; fields 非 null 即覆盖(允许清空); description 只要出现即覆盖.
    """

    name: str | None = None
    description: str | None = None
    category: str | None = None
    fields: FieldList | None = None

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return strip_optional_text(value)

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if self.name:
            changes["name"] = self.name
        if "description" in self.model_fields_set:
            changes["description"] = self.description
        if self.category:
            changes["category"] = self.category
        if self.fields is not None:
            changes["fields"] = dump_fields(self.fields)
        return changes


__all__ = ["TemplateCreatePayload", "TemplateUpdatePayload"]
