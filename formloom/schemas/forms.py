"""表单 schema.

表单名称在写入时去除首尾空白并转为大写; 字段既可直接以 `fields` 提交,
也可包在 `formJson.fields` 中提交, `formJson.styles` 同理.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator

from formloom.constants import DEFAULT_FORM_STYLES
from formloom.schemas._common import ensure_mapping, require_fields
from formloom.schemas.base import PayloadSchema
from formloom.schemas.fields import FieldList, dump_fields


class FormStyles(BaseModel):
    """表单主题样式, 缺失项使用默认值."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    background_color: str = Field(default=DEFAULT_FORM_STYLES["backgroundColor"], alias="backgroundColor")
    text_color: str = Field(default=DEFAULT_FORM_STYLES["textColor"], alias="textColor")
    primary_color: str = Field(default=DEFAULT_FORM_STYLES["primaryColor"], alias="primaryColor")
    border_radius: int | float = Field(default=DEFAULT_FORM_STYLES["borderRadius"], alias="borderRadius")
    font_family: str = Field(default=DEFAULT_FORM_STYLES["fontFamily"], alias="fontFamily")

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class FormJson(BaseModel):
    """编辑器导出的表单 JSON 包装."""

    model_config = ConfigDict(extra="ignore")

    fields: FieldList | None = None
    styles: FormStyles | None = None


def _unwrap_form_json(data: Any) -> Any:
    """把 formJson 中的 fields/styles 提升到顶层, 顶层显式值优先."""
    mapping = ensure_mapping(data)
    form_json = mapping.get("formJson")
    if not isinstance(form_json, dict):
        return data
    merged = dict(mapping)
    for key in ("fields", "styles"):
        if merged.get(key) is None and form_json.get(key) is not None:
            merged[key] = form_json[key]
    return merged


class FormCreatePayload(PayloadSchema):
    """创建表单 payload."""

    collection_name: StrictStr = Field(alias="collectionName")
    form_name: StrictStr = Field(alias="formName")
    fields: FieldList = Field(default_factory=list)
    styles: FormStyles = Field(default_factory=FormStyles)
    survey_json: Any = Field(default=None, alias="surveyJson")

    @model_validator(mode="before")
    @classmethod
    def _prepare(cls, data: Any) -> Any:
        require_fields(data, required=("collectionName", "formName"))
        return _unwrap_form_json(data)

    @field_validator("collection_name", "form_name")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("styles", mode="before")
    @classmethod
    def _default_styles(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_document(self) -> dict[str, Any]:
        return {
            "collectionName": self.collection_name,
            "formName": self.form_name,
            "fields": dump_fields(self.fields),
            "styles": self.styles.to_document(),
            "surveyJson": self.survey_json,
        }


class FormUpdatePayload(PayloadSchema):
    """更新表单 payload.

    collectionName/formName/fields/styles/surveyJson(以及 formJson 内的 fields/styles)
    出现即覆盖; 其余键忽略.
    """

    collection_name: StrictStr | None = Field(default=None, alias="collectionName")
    form_name: StrictStr | None = Field(default=None, alias="formName")
    fields: FieldList | None = None
    styles: FormStyles | None = None
    survey_json: Any = Field(default=None, alias="surveyJson")

    @model_validator(mode="before")
    @classmethod
    def _prepare(cls, data: Any) -> Any:
        return _unwrap_form_json(data)

    @field_validator("collection_name", "form_name")
    @classmethod
    def _strip_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if self.collection_name:
            changes["collectionName"] = self.collection_name
        if self.form_name:
            changes["formName"] = self.form_name
        if self.fields is not None:
            changes["fields"] = dump_fields(self.fields)
        if self.styles is not None:
            changes["styles"] = self.styles.to_document()
        if "survey_json" in self.model_fields_set:
            changes["surveyJson"] = self.survey_json
        return changes


__all__ = ["FormCreatePayload", "FormJson", "FormStyles", "FormUpdatePayload"]
