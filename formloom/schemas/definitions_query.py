"""定义列表查询参数 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from formloom.schemas.base import QuerySchema
from formloom.types.definitions import DefinitionListFilters


class DefinitionListQuery(QuerySchema):
    """定义列表的查询参数: category/search/type/collection, 空字符串表示不过滤."""

    category: str = ""
    search: str = ""
    layout_type: str = Field(default="", alias="type")
    collection: str = ""

    @field_validator("category", "search", "layout_type", "collection", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    def to_filters(self) -> DefinitionListFilters:
        return DefinitionListFilters(
            category=self.category,
            search=self.search,
            layout_type=self.layout_type,
            collection_name=self.collection,
        )


__all__ = ["DefinitionListQuery"]
