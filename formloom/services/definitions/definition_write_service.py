"""定义写操作 Service.

职责:
- 处理五类定义的创建/更新/删除编排
- 校验 → 规范化 → 唯一性预检 → repository 落库 → 存储异常归类
- 不返回 Response、不 commit
"""

from __future__ import annotations

from typing import Any

from formloom import db
from formloom.constants import DEFINITION_DISPLAY_NAMES, DEFINITION_NAME_KEYS, DefinitionKind
from formloom.errors import NotFoundError
from formloom.repositories.definitions_repository import DefinitionModel
from formloom.repositories.errors import StorageError
from formloom.services.definitions.definition_registry import DefinitionRegistry
from formloom.utils.structlog_config import log_info

# 由服务端维护, 不参与变更比对
_SERVER_MANAGED_KEYS = frozenset({"id", "createdAt", "updatedAt"})


class DefinitionWriteService:
    """定义写操作服务."""

    def __init__(self, registry: DefinitionRegistry | None = None) -> None:
        self._registry = registry or DefinitionRegistry()

    def create(self, kind: DefinitionKind, payload: object) -> DefinitionModel:
        """创建定义.

        Raises:
            ValidationError: payload 校验失败(枚举越界为 InvalidEnumError).
            DuplicateNameError: 名称已被占用.
            StorageUnavailableError: 存储故障.

        """
        document = self._registry.validate_create(kind, payload)
        name_key = DEFINITION_NAME_KEYS[kind]
        name = self._registry.check_unique_name(kind, document[name_key])

        try:
            record = self._registry.repository(kind).insert(document)
        except StorageError as exc:
            db.session.rollback()
            raise self._registry.translate_storage_error(kind, exc, name=name) from exc

        log_info(
            f"创建{DEFINITION_DISPLAY_NAMES[kind]}成功",
            module="definitions",
            kind=kind.value,
            definition_id=record.id,
            name=name,
        )
        return record

    def update(self, kind: DefinitionKind, definition_id: int, payload: object) -> DefinitionModel:
        """按种类的部分更新规则更新定义; 改名时重新检查唯一性."""
        record = self._get_or_raise(kind, definition_id)
        existing = record.to_dict()
        merged = self._registry.apply_partial_update(kind, existing, payload)
        changes = {
            key: value
            for key, value in merged.items()
            if key not in _SERVER_MANAGED_KEYS and existing.get(key) != value
        }

        name_key = DEFINITION_NAME_KEYS[kind]
        if name_key in changes:
            self._registry.check_unique_name(kind, changes[name_key], exclude_id=definition_id)

        if not changes:
            return record

        try:
            updated = self._registry.repository(kind).update_by_key(definition_id, changes)
        except StorageError as exc:
            db.session.rollback()
            raise self._registry.translate_storage_error(kind, exc, name=changes.get(name_key)) from exc
        if updated is None:
            raise self._not_found(kind, definition_id)

        log_info(
            f"更新{DEFINITION_DISPLAY_NAMES[kind]}成功",
            module="definitions",
            kind=kind.value,
            definition_id=definition_id,
            changed_keys=sorted(changes),
        )
        return updated

    def delete(self, kind: DefinitionKind, definition_id: int) -> DefinitionModel:
        """删除定义, 不存在时抛出 NotFoundError."""
        try:
            deleted = self._registry.repository(kind).delete_by_key(definition_id)
        except StorageError as exc:
            db.session.rollback()
            raise self._registry.translate_storage_error(kind, exc) from exc
        if deleted is None:
            raise self._not_found(kind, definition_id)

        log_info(
            f"删除{DEFINITION_DISPLAY_NAMES[kind]}成功",
            module="definitions",
            kind=kind.value,
            definition_id=definition_id,
        )
        return deleted

    def _get_or_raise(self, kind: DefinitionKind, definition_id: int) -> Any:
        try:
            record = self._registry.repository(kind).find_by_key(definition_id)
        except StorageError as exc:
            raise self._registry.translate_storage_error(kind, exc) from exc
        if record is None:
            raise self._not_found(kind, definition_id)
        return record

    @staticmethod
    def _not_found(kind: DefinitionKind, definition_id: int) -> NotFoundError:
        return NotFoundError(
            f"{DEFINITION_DISPLAY_NAMES[kind]}不存在",
            extra={"kind": kind.value, "definition_id": definition_id},
        )


__all__ = ["DefinitionWriteService"]
