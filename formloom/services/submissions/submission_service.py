"""提交记录 Service.

职责:
- 校验并保存表单提交(表单名称/集合名称为提交时快照)
- 按 formId/collection 查询最近的提交记录
- 不返回 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Mapping

from flask import current_app

from formloom import db
from formloom.errors import StorageUnavailableError
from formloom.models import Submission
from formloom.repositories.errors import StorageError
from formloom.repositories.submissions_repository import SubmissionsRepository
from formloom.schemas.submissions import SubmissionCreatePayload, SubmissionListQuery
from formloom.schemas.validation import validate_or_raise
from formloom.utils.structlog_config import log_info


class SubmissionService:
    """表单提交服务."""

    def __init__(self, repository: SubmissionsRepository | None = None, *, list_limit: int | None = None) -> None:
        self._repository = repository or SubmissionsRepository()
        self._list_limit = list_limit

    @property
    def list_limit(self) -> int:
        if self._list_limit is not None:
            return self._list_limit
        return int(current_app.config.get("SUBMISSION_LIST_LIMIT", 100))

    def create(self, payload: object) -> Submission:
        """保存一条提交记录.

        提交不校验表单是否存在, formId 只作为引用保存.
        """
        validated = validate_or_raise(SubmissionCreatePayload, payload)
        document = {
            "formId": validated.form_id,
            "collectionName": validated.collection_name,
            "formName": validated.form_name,
            "data": validated.data,
        }
        try:
            submission = self._repository.add(document)
        except StorageError as exc:
            db.session.rollback()
            raise StorageUnavailableError(extra={"operation": exc.operation}) from exc

        log_info(
            "保存表单提交成功",
            module="submissions",
            submission_id=submission.id,
            form_id=validated.form_id,
            collection_name=validated.collection_name,
        )
        return submission

    def list_submissions(self, params: Mapping[str, object] | None = None) -> list[Submission]:
        """返回最新的提交记录(按创建时间倒序, 最多 list_limit 条)."""
        query = validate_or_raise(SubmissionListQuery, dict(params or {}))
        try:
            return self._repository.list_submissions(
                form_id=query.form_id,
                collection_name=query.collection,
                limit=self.list_limit,
            )
        except StorageError as exc:
            raise StorageUnavailableError(extra={"operation": exc.operation}) from exc


__all__ = ["SubmissionService"]
