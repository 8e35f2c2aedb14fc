"""表单提交 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictInt, StrictStr, field_validator, model_validator

from formloom.schemas._common import require_fields
from formloom.schemas.base import PayloadSchema, QuerySchema


class SubmissionCreatePayload(PayloadSchema):
    """创建提交记录 payload.

    collectionName/formName 为提交时的快照, 之后不再随表单变化.
    """

    form_id: StrictInt = Field(alias="formId")
    collection_name: StrictStr = Field(alias="collectionName")
    form_name: StrictStr = Field(alias="formName")
    data: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _validate_required_fields(cls, data: Any) -> Any:
        return require_fields(data, required=("formId", "collectionName", "formName"))

    @field_validator("form_id", mode="before")
    @classmethod
    def _parse_form_id(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return value

    @field_validator("collection_name", "form_name")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("data", mode="before")
    @classmethod
    def _default_data(cls, value: Any) -> Any:
        return {} if value is None else value


class SubmissionListQuery(QuerySchema):
    """提交记录列表查询参数."""

    form_id: int | None = Field(default=None, alias="formId")
    collection: str = ""

    @field_validator("form_id", mode="before")
    @classmethod
    def _blank_form_id(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("collection", mode="before")
    @classmethod
    def _strip_collection(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


__all__ = ["SubmissionCreatePayload", "SubmissionListQuery"]
