"""集合 schema."""

from __future__ import annotations

from typing import Any

from pydantic import StrictStr, field_validator, model_validator

from formloom.schemas._common import require_fields, strip_optional_text
from formloom.schemas.base import PayloadSchema


class CollectionCreatePayload(PayloadSchema):
    """创建集合 payload."""

    name: StrictStr
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("name",))

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, value: Any) -> Any:
        return strip_optional_text(value)

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description}


class CollectionUpdatePayload(PayloadSchema):
    """更新集合 payload: name 非空时更新, description 出现即覆盖."""

    name: str | None = None
    description: str | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return strip_optional_text(value)

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if self.name:
            changes["name"] = self.name
        if "description" in self.model_fields_set:
            changes["description"] = self.description
        return changes


__all__ = ["CollectionCreatePayload", "CollectionUpdatePayload"]
