"""自定义字段 schema.

自定义字段以 `fieldName` 作为全局唯一的引用键, 选择类字段通过 `customFieldId`(= fieldName)
引用其 LOV 条目.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator, model_validator

from formloom.constants import FieldKind
from formloom.schemas._common import require_fields, strip_optional_text, strip_required_text
from formloom.schemas.base import PayloadSchema
from formloom.schemas.lov import LovItem, validate_lov_type
from formloom.schemas.validation import INVALID_ENUM_KEY, SchemaMessageKeyError


def _validate_data_type(value: Any) -> Any:
    if value not in FieldKind.values():
        raise SchemaMessageKeyError(
            f"dataType 不支持: {value}",
            message_key=INVALID_ENUM_KEY,
            field="dataType",
        )
    return value


class CustomFieldCreatePayload(PayloadSchema):
    """创建自定义字段 payload."""

    field_name: StrictStr = Field(alias="fieldName")
    field_label: StrictStr = Field(alias="fieldLabel")
    data_type: StrictStr = Field(alias="dataType")
    category: StrictStr
    class_name: str | None = Field(default=None, alias="className")
    lov_type: str | None = Field(default=None, alias="lovType")
    lov_items: list[LovItem] = Field(default_factory=list, alias="lovItems")

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("fieldName", "fieldLabel", "dataType", "category"))

    @field_validator("field_name", "field_label", "category")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("class_name", mode="before")
    @classmethod
    def _strip_class_name(cls, value: Any) -> Any:
        return strip_optional_text(value)

    @field_validator("data_type", mode="before")
    @classmethod
    def _validate_data_type(cls, value: Any) -> Any:
        return _validate_data_type(value)

    @field_validator("lov_type", mode="before")
    @classmethod
    def _validate_lov_type(cls, value: Any) -> Any:
        return validate_lov_type(value)

    @field_validator("lov_items", mode="before")
    @classmethod
    def _default_lov_items(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_document(self) -> dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "fieldLabel": self.field_label,
            "dataType": self.data_type,
            "category": self.category,
            "className": self.class_name,
            "lovType": self.lov_type,
            "lovItems": [item.model_dump(by_alias=True, exclude_none=True) for item in self.lov_items],
        }


class CustomFieldUpdatePayload(PayloadSchema):
    """更新自定义字段 payload.

    payload 中出现的每个已知键都会覆盖存储值; 未知键忽略.
    """

    field_name: StrictStr | None = Field(default=None, alias="fieldName")
    field_label: StrictStr | None = Field(default=None, alias="fieldLabel")
    data_type: StrictStr | None = Field(default=None, alias="dataType")
    category: StrictStr | None = None
    class_name: str | None = Field(default=None, alias="className")
    lov_type: str | None = Field(default=None, alias="lovType")
    lov_items: list[LovItem] | None = Field(default=None, alias="lovItems")

    @field_validator("field_name", mode="after")
    @classmethod
    def _strip_field_name(cls, value: str | None) -> str | None:
        return None if value is None else strip_required_text(value, field="fieldName")

    @field_validator("field_label", mode="after")
    @classmethod
    def _strip_field_label(cls, value: str | None) -> str | None:
        return None if value is None else strip_required_text(value, field="fieldLabel")

    @field_validator("category", mode="after")
    @classmethod
    def _strip_category(cls, value: str | None) -> str | None:
        return None if value is None else strip_required_text(value, field="category")

    @field_validator("class_name", mode="before")
    @classmethod
    def _strip_class_name(cls, value: Any) -> Any:
        return strip_optional_text(value)

    @field_validator("data_type", mode="before")
    @classmethod
    def _validate_data_type(cls, value: Any) -> Any:
        return value if value is None else _validate_data_type(value)

    @field_validator("lov_type", mode="before")
    @classmethod
    def _validate_lov_type(cls, value: Any) -> Any:
        return validate_lov_type(value)

    @model_validator(mode="after")
    def _reject_null_required(self) -> CustomFieldUpdatePayload:
        for attr, key in (
            ("field_name", "fieldName"),
            ("field_label", "fieldLabel"),
            ("data_type", "dataType"),
            ("category", "category"),
        ):
            if attr in self.model_fields_set and getattr(self, attr) is None:
                raise SchemaMessageKeyError(f"{key}不能为空", message_key="MISSING_REQUIRED_FIELDS", field=key)
        return self

    def to_changes(self) -> dict[str, Any]:
        """返回 payload 中显式出现的已知键(camelCase)."""
        changes: dict[str, Any] = {}
        for name in self.model_fields_set:
            alias = type(self).model_fields[name].alias or name
            value = getattr(self, name)
            if name == "lov_items":
                value = [item.model_dump(by_alias=True, exclude_none=True) for item in value or []]
            changes[alias] = value
        return changes


class CustomFieldRecord(PayloadSchema):
    """LOV 解析使用的自定义字段只读视图."""

    field_name: str = Field(alias="fieldName")
    lov_type: str | None = Field(default=None, alias="lovType")
    lov_items: list[LovItem] = Field(default_factory=list, alias="lovItems")

    @field_validator("lov_items", mode="before")
    @classmethod
    def _default_lov_items(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = ["CustomFieldCreatePayload", "CustomFieldRecord", "CustomFieldUpdatePayload"]
