"""定义 Repository.

职责:
- 五类定义(集合/自定义字段/布局/模板/表单)共用的读写入口
- 负责 Query 组装、落库(add/flush/delete)与存储异常归类
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from formloom import db
from formloom.constants import DEFINITION_NAME_KEYS, DefinitionKind
from formloom.models import Collection, CustomField, Form, FormLayout, Template
from formloom.repositories.errors import DuplicateKeyError, StorageError
from formloom.types.definitions import DefinitionListFilters

DefinitionModel = Collection | CustomField | FormLayout | Template | Form

DEFINITION_MODELS: dict[DefinitionKind, type[Any]] = {
    DefinitionKind.COLLECTION: Collection,
    DefinitionKind.CUSTOM_FIELD: CustomField,
    DefinitionKind.FORM_LAYOUT: FormLayout,
    DefinitionKind.TEMPLATE: Template,
    DefinitionKind.FORM: Form,
}

# search 参数匹配的列(按种类)
_SEARCH_COLUMNS: dict[DefinitionKind, tuple[str, ...]] = {
    DefinitionKind.CUSTOM_FIELD: ("field_name", "field_label"),
    DefinitionKind.TEMPLATE: ("name",),
    DefinitionKind.FORM: ("form_name",),
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DefinitionsRepository:
    """单一定义种类的 Repository."""

    def __init__(self, kind: DefinitionKind) -> None:
        self.kind = kind
        self.model = DEFINITION_MODELS[kind]
        self.name_attr = self.model.DOCUMENT_COLUMNS[DEFINITION_NAME_KEYS[kind]]

    def find_by_key(self, definition_id: int) -> DefinitionModel | None:
        try:
            return cast("DefinitionModel | None", db.session.get(self.model, definition_id))
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation="find_by_key") from exc

    def find_by_name(self, name: str, *, exclude_id: int | None = None) -> DefinitionModel | None:
        name_column = cast(ColumnElement[str], getattr(self.model, self.name_attr))
        query = self.model.query.filter(name_column == name)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        try:
            return cast("DefinitionModel | None", query.first())
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation="find_by_name") from exc

    def find_all(self, filters: DefinitionListFilters | None = None) -> list[DefinitionModel]:
        """按筛选条件查询, 最新创建的在前; 空条件表示不过滤."""
        filters = filters or DefinitionListFilters()
        query = self.model.query

        normalized_search = (filters.search or "").strip()
        search_columns = _SEARCH_COLUMNS.get(self.kind, ())
        if normalized_search and search_columns:
            like_pattern = f"%{_escape_like(normalized_search)}%"
            query = query.filter(
                or_(
                    *(
                        cast(ColumnElement[str], getattr(self.model, column)).ilike(like_pattern, escape="\\")
                        for column in search_columns
                    ),
                ),
            )

        if filters.category and hasattr(self.model, "category"):
            query = query.filter(self.model.category == filters.category)
        if filters.layout_type and self.kind == DefinitionKind.FORM_LAYOUT:
            query = query.filter(FormLayout.layout_type == filters.layout_type)
        if filters.collection_name and self.kind == DefinitionKind.FORM:
            query = query.filter(Form.collection_name == filters.collection_name)

        query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        try:
            return list(query.all())
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation="find_all") from exc

    def list_distinct_categories(self) -> list[str | None]:
        """返回 category 列的去重值(包含空值), 不排序."""
        try:
            rows = db.session.query(self.model.category).distinct().all()
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation="list_distinct_categories") from exc
        return [row[0] for row in rows]

    def insert(self, document: Mapping[str, Any]) -> DefinitionModel:
        record = self.model()
        record.apply_document(document)
        db.session.add(record)
        self._flush("insert")
        return cast("DefinitionModel", record)

    def update_by_key(self, definition_id: int, changes: Mapping[str, Any]) -> DefinitionModel | None:
        record = self.find_by_key(definition_id)
        if record is None:
            return None
        record.apply_document(changes)
        self._flush("update_by_key")
        return record

    def delete_by_key(self, definition_id: int) -> DefinitionModel | None:
        record = self.find_by_key(definition_id)
        if record is None:
            return None
        db.session.delete(record)
        self._flush("delete_by_key")
        return record

    @staticmethod
    def _flush(operation: str) -> None:
        try:
            db.session.flush()
        except IntegrityError as exc:
            raise DuplicateKeyError(str(exc.orig), operation=operation) from exc
        except SQLAlchemyError as exc:
            raise StorageError(str(exc), operation=operation) from exc
