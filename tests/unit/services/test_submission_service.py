from __future__ import annotations

import pytest

import formloom.services.submissions.submission_service as submission_module
from formloom.errors import StorageUnavailableError, ValidationError
from formloom.repositories.errors import StorageError
from formloom.services.submissions.submission_service import SubmissionService


def _payload(form_id: int = 1, collection: str = "crm", **data: object) -> dict[str, object]:
    return {"formId": form_id, "collectionName": collection, "formName": "LEAD", "data": data}


@pytest.mark.unit
def test_create_stores_snapshot_without_checking_form(app_context) -> None:
    submission = SubmissionService().create(_payload(form_id=404, email="a@example.com"))

    assert submission.id is not None
    assert submission.to_dict()["formId"] == 404
    assert submission.to_dict()["data"] == {"email": "a@example.com"}


@pytest.mark.unit
def test_create_requires_form_identity(app_context) -> None:
    with pytest.raises(ValidationError) as excinfo:
        SubmissionService().create({"collectionName": "crm", "data": {}})

    assert excinfo.value.message_key == "MISSING_REQUIRED_FIELDS"


@pytest.mark.unit
def test_list_filters_and_orders_newest_first(app_context) -> None:
    service = SubmissionService()
    first = service.create(_payload(form_id=1))
    service.create(_payload(form_id=2, collection="hr"))
    third = service.create(_payload(form_id=1))

    by_form = service.list_submissions({"formId": "1"})
    by_collection = service.list_submissions({"collection": "hr"})

    assert [item.id for item in by_form] == [third.id, first.id]
    assert [item.form_id for item in by_collection] == [2]


@pytest.mark.unit
def test_list_is_capped_by_limit(app_context) -> None:
    service = SubmissionService(list_limit=2)
    for _ in range(4):
        service.create(_payload())

    assert len(service.list_submissions({})) == 2


@pytest.mark.unit
def test_list_limit_defaults_to_config(app_context) -> None:
    app_context.config["SUBMISSION_LIST_LIMIT"] = 3

    assert SubmissionService().list_limit == 3


@pytest.mark.unit
def test_create_maps_storage_failure(monkeypatch) -> None:
    class _BrokenRepo:
        def add(self, document):  # noqa: ANN001
            raise StorageError("disk full", operation="add_submission")

    monkeypatch.setattr(submission_module.db.session, "rollback", lambda: None)

    with pytest.raises(StorageUnavailableError):
        SubmissionService(repository=_BrokenRepo()).create(_payload())  # type: ignore[arg-type]
