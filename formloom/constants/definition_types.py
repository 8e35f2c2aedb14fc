"""定义模型使用的枚举常量.

字段种类、布局类型、LOV 类型与状态在多个层之间共享,集中维护避免字面量散落.
"""

from __future__ import annotations

from enum import Enum


class FieldKind(str, Enum):
    """字段种类(也是 CustomField.dataType 的取值范围)."""

    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    DROPDOWN = "dropdown"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    HEADING = "heading"
    DIVIDER = "divider"
    SPACER = "spacer"
    TABLE = "table"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


CHOICE_FIELD_KINDS: frozenset[str] = frozenset(
    {FieldKind.DROPDOWN.value, FieldKind.RADIO.value, FieldKind.CHECKBOX.value},
)


class LayoutType(str, Enum):
    """表单布局类型.

    创建时仅允许 form-group / box-layout; grid-layout 为历史数据遗留值,只读兼容.
    """

    FORM_GROUP = "form-group"
    BOX_LAYOUT = "box-layout"
    GRID_LAYOUT = "grid-layout"


CREATABLE_LAYOUT_TYPES: tuple[str, ...] = (LayoutType.FORM_GROUP.value, LayoutType.BOX_LAYOUT.value)


class LovType(str, Enum):
    """LOV 数据来源."""

    USER_DEFINED = "user-defined"
    API = "api"


class LovStatus(str, Enum):
    """LOV 条目状态."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class DefinitionKind(str, Enum):
    """五类可存储的定义."""

    COLLECTION = "collection"
    CUSTOM_FIELD = "custom_field"
    FORM_LAYOUT = "form_layout"
    TEMPLATE = "template"
    FORM = "form"


# 每类定义的唯一名称键(对外 camelCase 名称)
DEFINITION_NAME_KEYS: dict[DefinitionKind, str] = {
    DefinitionKind.COLLECTION: "name",
    DefinitionKind.CUSTOM_FIELD: "fieldName",
    DefinitionKind.FORM_LAYOUT: "layoutName",
    DefinitionKind.TEMPLATE: "name",
    DefinitionKind.FORM: "formName",
}

DEFINITION_DISPLAY_NAMES: dict[DefinitionKind, str] = {
    DefinitionKind.COLLECTION: "集合",
    DefinitionKind.CUSTOM_FIELD: "自定义字段",
    DefinitionKind.FORM_LAYOUT: "表单布局",
    DefinitionKind.TEMPLATE: "模板",
    DefinitionKind.FORM: "表单",
}

DEFAULT_FORM_STYLES: dict[str, str | int] = {
    "backgroundColor": "#ffffff",
    "textColor": "#1e293b",
    "primaryColor": "#0ea5e9",
    "borderRadius": 8,
    "fontFamily": "Inter, sans-serif",
}

__all__ = [
    "CHOICE_FIELD_KINDS",
    "CREATABLE_LAYOUT_TYPES",
    "DEFAULT_FORM_STYLES",
    "DEFINITION_DISPLAY_NAMES",
    "DEFINITION_NAME_KEYS",
    "DefinitionKind",
    "FieldKind",
    "LayoutType",
    "LovStatus",
    "LovType",
]
