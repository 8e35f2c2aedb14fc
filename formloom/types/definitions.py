"""定义查询相关类型."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from formloom.schemas.custom_fields import CustomFieldRecord


@dataclass(slots=True)
class DefinitionListFilters:
    """定义列表筛选条件.

    空字符串表示不过滤.
    """

    category: str = ""
    search: str = ""
    layout_type: str = ""
    collection_name: str = ""


@dataclass(slots=True)
class NamespaceProvisionOutcome:
    """物理命名空间创建结果."""

    name: str
    status: str
    message: str | None = None


CustomFieldLookup: TypeAlias = Callable[[str], "CustomFieldRecord | None"]
ResolvedOptionMap: TypeAlias = Mapping[str, list]

__all__ = [
    "CustomFieldLookup",
    "DefinitionListFilters",
    "NamespaceProvisionOutcome",
    "ResolvedOptionMap",
]
