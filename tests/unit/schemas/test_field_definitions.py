import pytest

from formloom.errors import ValidationError
from formloom.schemas.fields import DropdownField, TableField, TextField
from formloom.services.fields.field_definition_service import (
    serialize_field_definition,
    serialize_field_list,
    validate_field_definition,
    validate_field_list,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        {"id": "f1", "type": "text", "label": "Name", "required": True, "widthPercent": 50},
        {"id": "f2", "type": "number", "label": "Age", "min": 0, "max": 120, "step": 1},
        {"id": "f3", "type": "email", "label": "Email", "placeholder": "you@example.com"},
        {"id": "f4", "type": "date", "label": "Birthday", "minDate": "1900-01-01", "format": "YYYY-MM-DD"},
        {"id": "f5", "type": "dropdown", "label": "Color", "options": ["red", {"value": "g", "label": "Green"}]},
        {"id": "f6", "type": "radio", "label": "Size", "customFieldId": "size", "labelPosition": "top"},
        {"id": "f7", "type": "checkbox", "label": "Tags", "options": []},
        {"id": "f8", "type": "heading", "label": "Title", "tag": "h2", "align": "center"},
        {"id": "f9", "type": "divider", "label": ""},
        {"id": "f10", "type": "spacer", "label": "", "height": 24},
        {
            "id": "f11",
            "type": "table",
            "label": "Items",
            "columns": [
                {"id": "sku", "type": "text", "label": "SKU"},
                {"id": "qty", "type": "number", "label": "Qty", "min": 1},
            ],
            "rows": [{"sku": "A-1", "qty": 2}],
        },
    ],
)
def test_field_definition_round_trip(raw) -> None:
    field = validate_field_definition(raw)

    serialized = serialize_field_definition(field)

    assert validate_field_definition(serialized) == field
    assert serialize_field_definition(validate_field_definition(serialized)) == serialized


@pytest.mark.unit
def test_serialize_uses_camel_case_and_omits_unset_optionals() -> None:
    field = validate_field_definition({"id": "d1", "type": "date", "label": "Due", "maxDate": "2030-12-31"})

    assert serialize_field_definition(field) == {
        "id": "d1",
        "type": "date",
        "label": "Due",
        "maxDate": "2030-12-31",
    }


@pytest.mark.unit
def test_width_hints_are_preserved_verbatim() -> None:
    field = validate_field_definition(
        {"id": "w", "type": "text", "label": "W", "width": "half", "widthPercent": 33.3, "widthColumns": 4},
    )

    serialized = serialize_field_definition(field)

    assert serialized["width"] == "half"
    assert serialized["widthPercent"] == 33.3
    assert serialized["widthColumns"] == 4


@pytest.mark.unit
@pytest.mark.parametrize(
    ("width_percent", "width_columns"),
    [("50", 6.0), (50.0, "6"), ("33%", 12)],
)
def test_width_hints_keep_their_original_type(width_percent, width_columns) -> None:
    field = validate_field_definition(
        {"id": "w", "type": "text", "label": "W", "widthPercent": width_percent, "widthColumns": width_columns},
    )

    serialized = serialize_field_definition(field)

    assert serialized["widthPercent"] == width_percent
    assert type(serialized["widthPercent"]) is type(width_percent)
    assert serialized["widthColumns"] == width_columns
    assert type(serialized["widthColumns"]) is type(width_columns)


@pytest.mark.unit
def test_unknown_keys_are_ignored() -> None:
    field = validate_field_definition({"id": "t", "type": "text", "label": "T", "cssHack": "x"})

    assert isinstance(field, TextField)
    assert "cssHack" not in serialize_field_definition(field)


@pytest.mark.unit
def test_unknown_type_is_rejected_with_type_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_field_definition({"id": "x", "type": "signature", "label": "Sign"})

    assert excinfo.value.extra["field"] == "type"


@pytest.mark.unit
def test_missing_id_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_field_definition({"type": "text", "label": "No id"})

    assert excinfo.value.extra["field"] == "id"


@pytest.mark.unit
def test_choice_field_without_option_source_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_field_definition({"id": "c", "type": "dropdown", "label": "Pick"})

    assert excinfo.value.message_key == "FIELD_DEFINITION_INVALID"
    assert excinfo.value.extra["field"] == "options"


@pytest.mark.unit
def test_choice_field_with_options_and_reference_is_accepted() -> None:
    field = validate_field_definition(
        {"id": "c", "type": "dropdown", "label": "Pick", "options": ["stale"], "customFieldId": "status"},
    )

    assert isinstance(field, DropdownField)
    assert field.has_reference is True


@pytest.mark.unit
def test_blank_custom_field_reference_is_treated_as_absent() -> None:
    with pytest.raises(ValidationError):
        validate_field_definition({"id": "c", "type": "radio", "label": "Pick", "customFieldId": "   "})


@pytest.mark.unit
def test_table_inside_table_is_rejected() -> None:
    raw = {
        "id": "outer",
        "type": "table",
        "label": "Outer",
        "columns": [{"id": "inner", "type": "table", "label": "Inner", "columns": []}],
    }

    with pytest.raises(ValidationError) as excinfo:
        validate_field_definition(raw)

    assert excinfo.value.extra["field"] == "columns.0.type"
    assert "嵌套表格" in str(excinfo.value)


@pytest.mark.unit
def test_table_without_columns_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_field_definition({"id": "t", "type": "table", "label": "T"})

    assert excinfo.value.extra["field"] == "columns"


@pytest.mark.unit
def test_table_column_id_falls_back_to_name() -> None:
    field = validate_field_definition(
        {"id": "grid", "type": "table", "label": "Grid", "columns": [{"name": "amount", "type": "number"}]},
    )

    assert isinstance(field, TableField)
    assert field.columns[0].id == "amount"


@pytest.mark.unit
def test_table_rows_are_stored_without_validation() -> None:
    rows = [{"anything": [1, 2, 3]}, {"nested": {"ok": True}}]
    field = validate_field_definition(
        {"id": "grid", "type": "table", "label": "Grid", "columns": [], "rows": rows},
    )

    assert serialize_field_definition(field)["rows"] == rows


@pytest.mark.unit
def test_table_rows_accept_non_object_entries() -> None:
    rows = [["A-1", 2], "free text", None]
    field = validate_field_definition(
        {"id": "grid", "type": "table", "label": "Grid", "columns": [], "rows": rows},
    )

    assert serialize_field_definition(field)["rows"] == rows


@pytest.mark.unit
def test_duplicate_ids_within_field_list_are_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_field_list(
            [
                {"id": "a", "type": "text", "label": "A"},
                {"id": "a", "type": "email", "label": "B"},
            ],
        )

    assert excinfo.value.extra["field"] == "1.id"


@pytest.mark.unit
def test_duplicate_column_ids_are_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_field_definition(
            {
                "id": "grid",
                "type": "table",
                "label": "Grid",
                "columns": [{"id": "c", "type": "text"}, {"id": "c", "type": "number"}],
            },
        )


@pytest.mark.unit
def test_field_list_error_path_includes_index() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_field_list(
            [
                {"id": "ok", "type": "text", "label": "OK"},
                {"id": "bad", "type": "checkbox", "label": "Bad"},
            ],
        )

    assert excinfo.value.extra["field"] == "1.options"


@pytest.mark.unit
def test_serialize_field_list_keeps_order() -> None:
    raw = [
        {"id": "b", "type": "text", "label": "B"},
        {"id": "a", "type": "divider", "label": ""},
    ]

    assert [item["id"] for item in serialize_field_list(validate_field_list(raw))] == ["b", "a"]
