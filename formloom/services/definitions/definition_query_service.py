"""定义查询 Service.

职责:
- 列表筛选、单条读取与分类枚举
- 存储故障统一映射为 StorageUnavailableError
"""

from __future__ import annotations

from collections.abc import Mapping

from formloom.constants import DEFINITION_DISPLAY_NAMES, DefinitionKind
from formloom.errors import NotFoundError, StorageUnavailableError, ValidationError
from formloom.repositories.definitions_repository import DefinitionModel, DefinitionsRepository
from formloom.repositories.errors import StorageError
from formloom.schemas.definitions_query import DefinitionListQuery
from formloom.schemas.validation import validate_or_raise
from formloom.types.definitions import DefinitionListFilters

# 支持分类枚举的定义种类
CATEGORIZED_KINDS = frozenset({DefinitionKind.CUSTOM_FIELD, DefinitionKind.FORM_LAYOUT, DefinitionKind.TEMPLATE})


class DefinitionQueryService:
    """定义查询服务."""

    def __init__(self, repositories: Mapping[DefinitionKind, DefinitionsRepository] | None = None) -> None:
        self._repositories: dict[DefinitionKind, DefinitionsRepository] = dict(repositories or {})

    def _repository(self, kind: DefinitionKind) -> DefinitionsRepository:
        if kind not in self._repositories:
            self._repositories[kind] = DefinitionsRepository(kind)
        return self._repositories[kind]

    def filter_definitions(
        self,
        kind: DefinitionKind,
        filters: DefinitionListFilters | Mapping[str, object] | None = None,
    ) -> list[DefinitionModel]:
        """按 category/search/type/collection 筛选, 最新创建的在前.

        filters 可以是 DefinitionListFilters, 也可以是原始查询参数字典.
        不适用于该种类的条件被忽略; 没有匹配时返回空列表.
        """
        if filters is None:
            resolved = DefinitionListFilters()
        elif isinstance(filters, DefinitionListFilters):
            resolved = filters
        else:
            resolved = validate_or_raise(DefinitionListQuery, dict(filters)).to_filters()

        try:
            return self._repository(kind).find_all(resolved)
        except StorageError as exc:
            raise StorageUnavailableError(extra={"kind": kind.value, "operation": exc.operation}) from exc

    def get_definition(self, kind: DefinitionKind, definition_id: int) -> DefinitionModel:
        try:
            record = self._repository(kind).find_by_key(definition_id)
        except StorageError as exc:
            raise StorageUnavailableError(extra={"kind": kind.value, "operation": exc.operation}) from exc
        if record is None:
            raise NotFoundError(
                f"{DEFINITION_DISPLAY_NAMES[kind]}不存在",
                extra={"kind": kind.value, "definition_id": definition_id},
            )
        return record

    def list_categories(self, kind: DefinitionKind) -> list[str]:
        """返回去重后的分类, 升序排列.

        表单布局的 category 可为空, 枚举时剔除 null 与空白值;
        普通列表查询不受影响, 仍会返回这些布局.
        """
        if kind not in CATEGORIZED_KINDS:
            raise ValidationError(
                f"{DEFINITION_DISPLAY_NAMES[kind]}不支持分类",
                extra={"kind": kind.value},
            )
        try:
            values = self._repository(kind).list_distinct_categories()
        except StorageError as exc:
            raise StorageUnavailableError(extra={"kind": kind.value, "operation": exc.operation}) from exc

        if kind == DefinitionKind.FORM_LAYOUT:
            return sorted(value for value in values if value and value.strip())
        return sorted(value for value in values if value is not None)


__all__ = ["CATEGORIZED_KINDS", "DefinitionQueryService"]
