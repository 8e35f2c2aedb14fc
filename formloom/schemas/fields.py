"""字段定义 schema.

字段定义是一个按 `type` 判别的联合类型, 共 11 种:
text/number/email/date/dropdown/radio/checkbox/heading/divider/spacer/table.

约定:
- 对外使用 camelCase 键(widthPercent/customFieldId/minDate 等), Python 侧使用 snake_case 属性.
- 未识别的附加键被忽略; 已识别的布局提示(widthPercent/widthColumns)不做类型转换, 原样保留.
- `table` 仅允许嵌套一层: 列本身不能再是 `table`.
- 选择类字段(dropdown/radio/checkbox)必须提供内联 options(或 items 快照)或 customFieldId.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from formloom.constants import FieldKind
from formloom.schemas.lov import OptionItem
from formloom.schemas.validation import SchemaMessageKeyError

FIELD_INVALID_KEY = "FIELD_DEFINITION_INVALID"

NumberLike = int | float
OptionValue = str | OptionItem


class FieldAddons(BaseModel):
    """输入框前后缀."""

    model_config = ConfigDict(extra="ignore")

    before: str | None = None
    after: str | None = None


class _FieldBase(BaseModel):
    """各字段种类共享的属性."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(min_length=1)
    label: str = ""
    name: str | None = None
    placeholder: str | None = None
    helper: str | None = None
    required: bool = False
    width: Literal["full", "half"] | None = None
    width_percent: Any = Field(default=None, alias="widthPercent")
    width_columns: Any = Field(default=None, alias="widthColumns")
    default: Any = None
    disabled: bool | None = None
    readonly: bool | None = None
    size: Literal["sm", "md", "lg"] | None = None
    input_type: str | None = Field(default=None, alias="inputType")
    addons: FieldAddons | None = None


class TextField(_FieldBase):
    type: Literal["text"]


class EmailField(_FieldBase):
    type: Literal["email"]


class NumberField(_FieldBase):
    type: Literal["number"]
    min: NumberLike | str | None = None
    max: NumberLike | str | None = None
    step: NumberLike | None = None


class DateField(_FieldBase):
    type: Literal["date"]
    min_date: str | None = Field(default=None, alias="minDate")
    max_date: str | None = Field(default=None, alias="maxDate")
    format: str | None = None


class ChoiceFieldBase(_FieldBase):
    """选择类字段.

    同时存在 customFieldId 与内联 options 时, options 视为缓存快照, 以引用为准.
    `items`/`lovItems` 是编辑器保存的快照, 原样保留.
    """

    options: list[OptionValue] | None = None
    custom_field_id: str | None = Field(default=None, alias="customFieldId")
    items: list[Any] | None = None
    lov_items: list[dict[str, Any]] | None = Field(default=None, alias="lovItems")

    @field_validator("custom_field_id", mode="before")
    @classmethod
    def _normalize_reference(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @model_validator(mode="after")
    def _require_option_source(self) -> ChoiceFieldBase:
        if self.custom_field_id or self.options is not None or self.items is not None:
            return self
        raise SchemaMessageKeyError(
            "选择类字段必须提供 options 或 customFieldId",
            message_key=FIELD_INVALID_KEY,
            field="options",
        )

    @property
    def has_reference(self) -> bool:
        return bool(self.custom_field_id)


class DropdownField(ChoiceFieldBase):
    type: Literal["dropdown"]


class RadioField(ChoiceFieldBase):
    type: Literal["radio"]
    view: str | None = None
    label_position: str | None = Field(default=None, alias="labelPosition")


class CheckboxField(ChoiceFieldBase):
    type: Literal["checkbox"]
    view: str | None = None
    label_position: str | None = Field(default=None, alias="labelPosition")


class HeadingField(_FieldBase):
    type: Literal["heading"]
    tag: Literal["h1", "h2", "h3", "h4", "h5", "h6"] | None = None
    align: Literal["left", "center", "right"] | None = None
    content: str | None = None


class DividerField(_FieldBase):
    type: Literal["divider"]


class SpacerField(_FieldBase):
    type: Literal["spacer"]
    height: NumberLike | str | None = None


ColumnDefinition = Annotated[
    TextField
    | NumberField
    | EmailField
    | DateField
    | DropdownField
    | RadioField
    | CheckboxField
    | HeadingField
    | DividerField
    | SpacerField,
    Field(discriminator="type"),
]


def ensure_unique_field_ids(fields: list[Any]) -> list[Any]:
    """同一字段列表内 id 必须唯一."""
    seen: set[str] = set()
    for index, field in enumerate(fields):
        if field.id in seen:
            raise SchemaMessageKeyError(
                f"字段 id 重复: {field.id}",
                message_key=FIELD_INVALID_KEY,
                field=f"{index}.id",
            )
        seen.add(field.id)
    return fields


class TableField(_FieldBase):
    """表格字段: columns 为有序的非表格字段定义, rows 为采集到的数据行(不校验)."""

    type: Literal["table"]
    columns: Annotated[list[ColumnDefinition], AfterValidator(ensure_unique_field_ids)]
    rows: list[Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _prepare_columns(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        columns = data.get("columns")
        if columns is None:
            raise SchemaMessageKeyError("表格字段必须提供 columns", message_key=FIELD_INVALID_KEY, field="columns")
        if not isinstance(columns, Sequence) or isinstance(columns, str):
            return data

        prepared: list[Any] = []
        for index, column in enumerate(columns):
            if isinstance(column, Mapping):
                if column.get("type") == FieldKind.TABLE.value:
                    raise SchemaMessageKeyError(
                        "表格列不支持嵌套表格",
                        message_key=FIELD_INVALID_KEY,
                        field=f"columns.{index}.type",
                    )
                # 网格编辑器生成的列只带 name
                if not column.get("id") and column.get("name"):
                    column = {**column, "id": column["name"]}
            prepared.append(column)
        return {**data, "columns": prepared}


FieldDefinition = Annotated[
    TextField
    | NumberField
    | EmailField
    | DateField
    | DropdownField
    | RadioField
    | CheckboxField
    | HeadingField
    | DividerField
    | SpacerField
    | TableField,
    Field(discriminator="type"),
]

FieldList = Annotated[list[FieldDefinition], AfterValidator(ensure_unique_field_ids)]

ChoiceField = DropdownField | RadioField | CheckboxField

FIELD_ADAPTER: TypeAdapter[Any] = TypeAdapter(FieldDefinition)
FIELD_LIST_ADAPTER: TypeAdapter[Any] = TypeAdapter(FieldList)


def dump_field(field: BaseModel) -> dict[str, Any]:
    """序列化单个字段定义: camelCase 键, 省略未设置的可选属性."""
    return field.model_dump(mode="json", by_alias=True, exclude_unset=True)


def dump_fields(fields: Sequence[BaseModel]) -> list[dict[str, Any]]:
    """序列化字段列表."""
    return [dump_field(field) for field in fields]


__all__ = [
    "FIELD_ADAPTER",
    "FIELD_LIST_ADAPTER",
    "CheckboxField",
    "ChoiceField",
    "ChoiceFieldBase",
    "ColumnDefinition",
    "DateField",
    "DividerField",
    "DropdownField",
    "EmailField",
    "FieldAddons",
    "FieldDefinition",
    "FieldList",
    "HeadingField",
    "NumberField",
    "RadioField",
    "SpacerField",
    "TableField",
    "TextField",
    "dump_field",
    "dump_fields",
    "ensure_unique_field_ids",
]
