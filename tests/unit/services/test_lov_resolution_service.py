from __future__ import annotations

import pytest

import formloom.services.lov.lov_resolution_service as lov_module
from formloom.errors import StorageUnavailableError
from formloom.repositories.errors import StorageError
from formloom.schemas.custom_fields import CustomFieldRecord
from formloom.schemas.lov import OptionItem
from formloom.services.fields.field_definition_service import validate_field_definition, validate_field_list
from formloom.services.lov.lov_resolution_service import (
    LovResolutionService,
    dump_options,
    resolve_field_list_options,
    resolve_options,
)


def _record(field_name: str, items: list[dict[str, object]], *, lov_type: str | None = "user-defined"):
    return CustomFieldRecord.model_validate({"fieldName": field_name, "lovType": lov_type, "lovItems": items})


def _lookup(*records: CustomFieldRecord):
    by_name = {record.field_name: record for record in records}
    return by_name.get


@pytest.mark.unit
def test_referenced_field_projects_only_active_items_in_stored_order() -> None:
    lookup = _lookup(
        _record(
            "color",
            [
                {"code": "A", "shortName": "Alpha", "status": "Active"},
                {"code": "B", "shortName": "Beta", "status": "Inactive"},
                {"code": "C", "shortName": "Gamma"},
            ],
        ),
    )
    field = validate_field_definition({"id": "f", "type": "dropdown", "label": "Color", "customFieldId": "color"})

    options = resolve_options(field, lookup)

    assert options == [OptionItem(value="A", label="Alpha"), OptionItem(value="C", label="Gamma")]


@pytest.mark.unit
def test_include_inactive_disables_status_filter() -> None:
    lookup = _lookup(
        _record(
            "color",
            [
                {"code": "A", "shortName": "Alpha", "status": "Active"},
                {"code": "B", "shortName": "Beta", "status": "Inactive"},
            ],
        ),
    )
    field = validate_field_definition({"id": "f", "type": "radio", "label": "Color", "customFieldId": "color"})

    options = resolve_options(field, lookup, include_inactive=True)

    assert [option.value for option in options] == ["A", "B"]


@pytest.mark.unit
def test_reference_wins_over_inline_options() -> None:
    lookup = _lookup(_record("size", [{"code": "S", "shortName": "Small"}]))
    field = validate_field_definition(
        {"id": "f", "type": "dropdown", "label": "Size", "customFieldId": "size", "options": ["stale"]},
    )

    assert resolve_options(field, lookup) == [OptionItem(value="S", label="Small")]


@pytest.mark.unit
def test_dangling_reference_yields_empty_list_and_logs_warning(monkeypatch) -> None:
    warnings: list[tuple[str, dict[str, object]]] = []

    def _fake_log_warning(message: str, **kwargs: object) -> None:
        warnings.append((message, dict(kwargs)))

    monkeypatch.setattr(lov_module, "log_warning", _fake_log_warning)
    field = validate_field_definition({"id": "f", "type": "checkbox", "label": "X", "customFieldId": "missing"})

    assert resolve_options(field, _lookup()) == []
    assert warnings
    message, kwargs = warnings[0]
    assert message == "选择字段引用的自定义字段不存在"
    assert kwargs["module"] == "lov"
    assert kwargs["custom_field_id"] == "missing"


@pytest.mark.unit
def test_api_lov_without_cached_items_yields_empty_list() -> None:
    lookup = _lookup(_record("remote", [], lov_type="api"))
    field = validate_field_definition({"id": "f", "type": "dropdown", "label": "R", "customFieldId": "remote"})

    assert resolve_options(field, lookup) == []


@pytest.mark.unit
def test_inline_options_are_returned_unchanged() -> None:
    field = validate_field_definition(
        {"id": "f", "type": "dropdown", "label": "X", "options": ["a", {"value": 2, "label": "Two"}]},
    )

    options = resolve_options(field, _lookup())

    assert options[0] == "a"
    assert options[1] == OptionItem(value=2, label="Two")
    assert dump_options(options) == ["a", {"value": 2, "label": "Two"}]


@pytest.mark.unit
def test_items_snapshot_is_used_when_options_absent() -> None:
    field = validate_field_definition(
        {"id": "f", "type": "radio", "label": "X", "items": ["yes", {"value": "n", "label": "No"}, 42]},
    )

    assert resolve_options(field, _lookup()) == ["yes", OptionItem(value="n", label="No")]


@pytest.mark.unit
def test_non_choice_field_has_no_options() -> None:
    field = validate_field_definition({"id": "t", "type": "text", "label": "T"})

    assert resolve_options(field, _lookup()) == []


@pytest.mark.unit
def test_field_list_resolution_keys_table_columns_by_table_id() -> None:
    lookup = _lookup(_record("unit", [{"code": "kg", "shortName": "Kilogram"}]))
    fields = validate_field_list(
        [
            {"id": "name", "type": "text", "label": "Name"},
            {"id": "pick", "type": "dropdown", "label": "Pick", "options": ["x"]},
            {
                "id": "lines",
                "type": "table",
                "label": "Lines",
                "columns": [
                    {"id": "qty", "type": "number"},
                    {"id": "unit", "type": "dropdown", "customFieldId": "unit"},
                ],
            },
        ],
    )

    resolved = resolve_field_list_options(fields, lookup)

    assert resolved == {"pick": ["x"], "lines.unit": [OptionItem(value="kg", label="Kilogram")]}


@pytest.mark.unit
def test_service_queries_each_custom_field_once() -> None:
    calls: list[str] = []

    class _DummyModel:
        def to_dict(self) -> dict[str, object]:
            return {"fieldName": "color", "lovItems": [{"code": "A", "shortName": "Alpha"}]}

    class _DummyRepo:
        def find_by_name(self, name: str, *, exclude_id: int | None = None):
            calls.append(name)
            return _DummyModel()

    service = LovResolutionService(repository=_DummyRepo())  # type: ignore[arg-type]
    fields = validate_field_list(
        [
            {"id": "a", "type": "dropdown", "label": "A", "customFieldId": "color"},
            {"id": "b", "type": "radio", "label": "B", "customFieldId": "color"},
        ],
    )

    resolved = service.resolve_fields(fields)

    assert resolved == {"a": [{"value": "A", "label": "Alpha"}], "b": [{"value": "A", "label": "Alpha"}]}
    assert calls == ["color"]


@pytest.mark.unit
def test_service_maps_storage_error_to_storage_unavailable() -> None:
    class _BrokenRepo:
        def find_by_name(self, name: str, *, exclude_id: int | None = None):
            raise StorageError("down", operation="find_by_name")

    service = LovResolutionService(repository=_BrokenRepo())  # type: ignore[arg-type]

    with pytest.raises(StorageUnavailableError):
        service.lookup_custom_field("color")
