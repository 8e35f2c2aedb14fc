from __future__ import annotations

import pytest

from formloom import db
from formloom.constants import DefinitionKind
from formloom.repositories.definitions_repository import DefinitionsRepository
from formloom.repositories.errors import DuplicateKeyError


@pytest.mark.unit
def test_insert_duplicate_name_raises_duplicate_key(app_context) -> None:
    repository = DefinitionsRepository(DefinitionKind.COLLECTION)
    repository.insert({"name": "contacts", "description": None})

    with pytest.raises(DuplicateKeyError) as excinfo:
        repository.insert({"name": "contacts", "description": "again"})

    assert excinfo.value.operation == "insert"
    db.session.rollback()


@pytest.mark.unit
def test_insert_ignores_unknown_document_keys(app_context) -> None:
    record = DefinitionsRepository(DefinitionKind.TEMPLATE).insert(
        {"name": "Address", "category": "common", "fields": [], "owner": "nobody"},
    )

    assert "owner" not in record.to_dict()
    assert record.to_dict()["name"] == "Address"


@pytest.mark.unit
def test_find_by_name_excludes_given_id(app_context) -> None:
    repository = DefinitionsRepository(DefinitionKind.FORM)
    record = repository.insert({"collectionName": "crm", "formName": "LEAD", "fields": [], "styles": {}})

    assert repository.find_by_name("LEAD") is record
    assert repository.find_by_name("LEAD", exclude_id=record.id) is None


@pytest.mark.unit
def test_update_and_delete_missing_key_return_none(app_context) -> None:
    repository = DefinitionsRepository(DefinitionKind.TEMPLATE)

    assert repository.update_by_key(123, {"name": "X"}) is None
    assert repository.delete_by_key(123) is None


@pytest.mark.unit
def test_update_by_key_applies_changes(app_context) -> None:
    repository = DefinitionsRepository(DefinitionKind.COLLECTION)
    record = repository.insert({"name": "contacts"})

    updated = repository.update_by_key(record.id, {"description": "people"})

    assert updated is not None
    assert updated.to_dict()["description"] == "people"


@pytest.mark.unit
def test_list_distinct_categories_keeps_null(app_context) -> None:
    repository = DefinitionsRepository(DefinitionKind.FORM_LAYOUT)
    repository.insert({"layoutName": "A", "layoutType": "form-group", "category": "crm", "fields": []})
    repository.insert({"layoutName": "B", "layoutType": "form-group", "category": None, "fields": []})
    repository.insert({"layoutName": "C", "layoutType": "form-group", "category": "crm", "fields": []})

    assert sorted(repository.list_distinct_categories(), key=lambda value: value or "") == [None, "crm"]
