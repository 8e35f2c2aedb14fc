"""提交记录 Repository.

职责:
- 负责提交记录的查询与落库(add/flush)
- 不做序列化、不 commit
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from formloom import db
from formloom.models import Submission
from formloom.repositories.errors import StorageError


class SubmissionsRepository:
    """提交记录 Repository."""

    def list_submissions(
        self,
        *,
        form_id: int | None = None,
        collection_name: str = "",
        limit: int = 100,
    ) -> list[Submission]:
        query = Submission.query
        if form_id is not None:
            query = query.filter(Submission.form_id == form_id)
        if collection_name:
            query = query.filter(Submission.collection_name == collection_name)
        query = query.order_by(Submission.created_at.desc(), Submission.id.desc()).limit(limit)
        try:
            return list(query.all())
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation="list_submissions") from exc

    def add(self, document: Mapping[str, Any]) -> Submission:
        submission = Submission()
        submission.apply_document(document)
        db.session.add(submission)
        try:
            db.session.flush()
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation="add_submission") from exc
        return submission
