from __future__ import annotations

import pytest

from formloom.constants import DefinitionKind
from formloom.errors import NotFoundError, StorageUnavailableError, ValidationError
from formloom.repositories.errors import StorageError
from formloom.services.definitions.definition_query_service import DefinitionQueryService
from formloom.services.definitions.definition_write_service import DefinitionWriteService
from formloom.types.definitions import DefinitionListFilters


def _seed_layouts() -> None:
    service = DefinitionWriteService()
    service.create(DefinitionKind.FORM_LAYOUT, {"layoutName": "A", "layoutType": "form-group", "category": "sales"})
    service.create(DefinitionKind.FORM_LAYOUT, {"layoutName": "B", "layoutType": "box-layout", "category": "crm"})
    service.create(DefinitionKind.FORM_LAYOUT, {"layoutName": "C", "layoutType": "form-group"})
    service.create(DefinitionKind.FORM_LAYOUT, {"layoutName": "D", "layoutType": "form-group", "category": "   "})
    service.create(DefinitionKind.FORM_LAYOUT, {"layoutName": "E", "layoutType": "box-layout", "category": "crm"})


@pytest.mark.unit
def test_layout_categories_are_sorted_and_skip_blank_values(app_context) -> None:
    _seed_layouts()

    assert DefinitionQueryService().list_categories(DefinitionKind.FORM_LAYOUT) == ["crm", "sales"]


@pytest.mark.unit
def test_plain_listing_still_returns_uncategorized_layouts(app_context) -> None:
    _seed_layouts()

    records = DefinitionQueryService().filter_definitions(DefinitionKind.FORM_LAYOUT)

    assert [record.layout_name for record in records] == ["E", "D", "C", "B", "A"]


@pytest.mark.unit
def test_layout_listing_filters_by_type_and_category(app_context) -> None:
    _seed_layouts()
    service = DefinitionQueryService()

    by_type = service.filter_definitions(DefinitionKind.FORM_LAYOUT, {"type": "box-layout"})
    by_both = service.filter_definitions(DefinitionKind.FORM_LAYOUT, {"type": "box-layout", "category": "crm"})

    assert [record.layout_name for record in by_type] == ["E", "B"]
    assert [record.layout_name for record in by_both] == ["E", "B"]


@pytest.mark.unit
def test_template_categories_are_sorted(app_context) -> None:
    writer = DefinitionWriteService()
    for name, category in (("Phone", "contact"), ("Address", "common"), ("Email", "contact")):
        writer.create(DefinitionKind.TEMPLATE, {"name": name, "category": category})

    assert DefinitionQueryService().list_categories(DefinitionKind.TEMPLATE) == ["common", "contact"]


@pytest.mark.unit
@pytest.mark.parametrize("kind", [DefinitionKind.FORM, DefinitionKind.COLLECTION])
def test_categories_are_not_supported_for_uncategorized_kinds(kind) -> None:
    with pytest.raises(ValidationError):
        DefinitionQueryService().list_categories(kind)


@pytest.mark.unit
def test_custom_field_search_matches_name_or_label_case_insensitively(app_context) -> None:
    writer = DefinitionWriteService()
    for field_name, label, data_type in (
        ("shipping_city", "City", "text"),
        ("zip", "Postal CODE", "text"),
        ("age", "Age", "number"),
    ):
        writer.create(
            DefinitionKind.CUSTOM_FIELD,
            {"fieldName": field_name, "fieldLabel": label, "dataType": data_type, "category": "address"},
        )
    service = DefinitionQueryService()

    by_label = service.filter_definitions(DefinitionKind.CUSTOM_FIELD, {"search": "code"})
    by_name = service.filter_definitions(DefinitionKind.CUSTOM_FIELD, {"search": "CITY"})

    assert [record.field_name for record in by_label] == ["zip"]
    assert [record.field_name for record in by_name] == ["shipping_city"]


@pytest.mark.unit
def test_search_treats_like_wildcards_literally(app_context) -> None:
    writer = DefinitionWriteService()
    writer.create(DefinitionKind.TEMPLATE, {"name": "100% done", "category": "misc"})
    writer.create(DefinitionKind.TEMPLATE, {"name": "1000 items", "category": "misc"})

    records = DefinitionQueryService().filter_definitions(DefinitionKind.TEMPLATE, {"search": "0%"})

    assert [record.name for record in records] == ["100% done"]


@pytest.mark.unit
def test_forms_filter_by_collection_and_return_empty_list_without_match(app_context) -> None:
    writer = DefinitionWriteService()
    writer.create(DefinitionKind.FORM, {"collectionName": "crm", "formName": "lead"})
    writer.create(DefinitionKind.FORM, {"collectionName": "hr", "formName": "leave"})
    service = DefinitionQueryService()

    crm = service.filter_definitions(DefinitionKind.FORM, DefinitionListFilters(collection_name="crm"))
    none = service.filter_definitions(DefinitionKind.FORM, {"collection": "finance"})

    assert [record.form_name for record in crm] == ["LEAD"]
    assert none == []


@pytest.mark.unit
def test_get_definition_raises_not_found(app_context) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        DefinitionQueryService().get_definition(DefinitionKind.FORM, 99)

    assert excinfo.value.extra["definition_id"] == 99


@pytest.mark.unit
def test_storage_failure_is_reported_as_storage_unavailable() -> None:
    class _BrokenRepo:
        def find_all(self, filters=None):  # noqa: ANN001
            raise StorageError("connection refused", operation="find_all")

    service = DefinitionQueryService(repositories={DefinitionKind.TEMPLATE: _BrokenRepo()})  # type: ignore[dict-item]

    with pytest.raises(StorageUnavailableError) as excinfo:
        service.filter_definitions(DefinitionKind.TEMPLATE)

    assert excinfo.value.extra["operation"] == "find_all"
