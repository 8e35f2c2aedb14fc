"""选择类字段的选项解析.

解析规则:
1. 字段带 customFieldId 时以引用为准: 查找自定义字段, 将 status=Active 的 LOV 条目
   按存储顺序投影为 {value: code, label: shortName}; 引用悬空时返回空列表并记录告警.
2. 否则返回内联 options(字符串保持为字符串); options 缺失时退回 items 快照.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from formloom.constants import DefinitionKind
from formloom.errors import StorageUnavailableError
from formloom.repositories.definitions_repository import DefinitionsRepository
from formloom.repositories.errors import StorageError
from formloom.schemas.custom_fields import CustomFieldRecord
from formloom.schemas.fields import ChoiceFieldBase, TableField
from formloom.schemas.lov import OptionItem
from formloom.services.fields.field_definition_service import validate_field_list
from formloom.types.definitions import CustomFieldLookup
from formloom.utils.structlog_config import log_warning

ResolvedOption = str | OptionItem


def resolve_options(
    field: Any,
    lookup_custom_field: CustomFieldLookup,
    *,
    include_inactive: bool = False,
) -> list[ResolvedOption]:
    """解析单个字段的有效选项.

    Args:
        field: 已校验的字段定义; 非选择类字段返回空列表.
        lookup_custom_field: 按 fieldName 查找自定义字段的回调.
        include_inactive: 为 True 时不过滤 Inactive 条目.

    Returns:
        选项列表, 引用悬空时为空列表.

    """
    if not isinstance(field, ChoiceFieldBase):
        return []

    if field.custom_field_id:
        record = lookup_custom_field(field.custom_field_id)
        if record is None:
            log_warning(
                "选择字段引用的自定义字段不存在",
                module="lov",
                field_id=field.id,
                custom_field_id=field.custom_field_id,
            )
            return []
        return [item.to_option() for item in record.lov_items if include_inactive or item.is_active]

    if field.options is not None:
        return list(field.options)
    if field.items is not None:
        return _coerce_items(field.items)
    return []


def resolve_field_list_options(
    fields: Sequence[Any],
    lookup_custom_field: CustomFieldLookup,
    *,
    include_inactive: bool = False,
) -> dict[str, list[ResolvedOption]]:
    """解析字段列表中所有选择类字段的选项.

    表格列以 ``"<tableId>.<columnId>"`` 为键.
    """
    resolved: dict[str, list[ResolvedOption]] = {}
    for field in fields:
        if isinstance(field, TableField):
            for column in field.columns:
                if isinstance(column, ChoiceFieldBase):
                    resolved[f"{field.id}.{column.id}"] = resolve_options(
                        column,
                        lookup_custom_field,
                        include_inactive=include_inactive,
                    )
        elif isinstance(field, ChoiceFieldBase):
            resolved[field.id] = resolve_options(field, lookup_custom_field, include_inactive=include_inactive)
    return resolved


def dump_options(options: Sequence[ResolvedOption]) -> list[Any]:
    """把解析结果转为 JSON 友好的结构."""
    return [option.model_dump(exclude_none=True) if isinstance(option, OptionItem) else option for option in options]


def _coerce_items(items: Sequence[Any]) -> list[ResolvedOption]:
    options: list[ResolvedOption] = []
    for item in items:
        if isinstance(item, str):
            options.append(item)
        elif isinstance(item, dict) and "value" in item:
            label = item.get("label")
            options.append(
                OptionItem(
                    value=item["value"],
                    label=str(label if label is not None else item["value"]),
                    disabled=item.get("disabled"),
                ),
            )
    return options


class LovResolutionService:
    """基于自定义字段注册表的选项解析服务.

    每个实例内对同一 fieldName 只查询一次, 实例随请求创建, 不跨请求缓存.
    """

    def __init__(self, repository: DefinitionsRepository | None = None) -> None:
        self._repository = repository or DefinitionsRepository(DefinitionKind.CUSTOM_FIELD)
        self._memo: dict[str, CustomFieldRecord | None] = {}

    def lookup_custom_field(self, field_name: str) -> CustomFieldRecord | None:
        if field_name in self._memo:
            return self._memo[field_name]
        try:
            model = self._repository.find_by_name(field_name)
        except StorageError as exc:
            raise StorageUnavailableError(extra={"operation": exc.operation}) from exc
        record = CustomFieldRecord.model_validate(model.to_dict()) if model is not None else None
        self._memo[field_name] = record
        return record

    def resolve(self, field: Any, *, include_inactive: bool = False) -> list[ResolvedOption]:
        return resolve_options(field, self.lookup_custom_field, include_inactive=include_inactive)

    def resolve_fields(self, fields: Sequence[Any], *, include_inactive: bool = False) -> dict[str, list[Any]]:
        resolved = resolve_field_list_options(fields, self.lookup_custom_field, include_inactive=include_inactive)
        return {field_id: dump_options(options) for field_id, options in resolved.items()}

    def resolve_stored_fields(self, raw_fields: object, *, include_inactive: bool = False) -> dict[str, list[Any]]:
        """校验存储的字段定义 JSON 后解析选项."""
        fields = validate_field_list(raw_fields or [])
        return self.resolve_fields(fields, include_inactive=include_inactive)


__all__ = [
    "LovResolutionService",
    "dump_options",
    "resolve_field_list_options",
    "resolve_options",
]
