"""定义注册表.

职责:
- 按定义种类分派 create/update schema, 统一名称规范化与唯一性预检
- `apply_partial_update` 为纯函数, 不访问存储
- 将存储层异常归类为业务异常(DuplicateNameError/StorageUnavailableError)

各种类的部分更新语义并不对称:
- 自定义字段: payload 中出现的已知键全部覆盖
- 表单布局: 仅 layoutName/category/fields/layoutConfig
- 模板: 仅 name/description/category/fields
- 表单: collectionName/formName/fields/styles/surveyJson(含 formJson 包装)
- 集合: 仅 name/description
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from formloom.constants import DEFINITION_DISPLAY_NAMES, DEFINITION_NAME_KEYS, DefinitionKind
from formloom.errors import DuplicateNameError, StorageUnavailableError
from formloom.repositories.definitions_repository import DefinitionsRepository
from formloom.repositories.errors import DuplicateKeyError, StorageError
from formloom.schemas.collections import CollectionCreatePayload, CollectionUpdatePayload
from formloom.schemas.custom_fields import CustomFieldCreatePayload, CustomFieldUpdatePayload
from formloom.schemas.form_layouts import FormLayoutCreatePayload, FormLayoutUpdatePayload
from formloom.schemas.forms import FormCreatePayload, FormUpdatePayload
from formloom.schemas.templates import TemplateCreatePayload, TemplateUpdatePayload
from formloom.schemas.validation import validate_or_raise

CREATE_SCHEMAS: dict[DefinitionKind, type[BaseModel]] = {
    DefinitionKind.COLLECTION: CollectionCreatePayload,
    DefinitionKind.CUSTOM_FIELD: CustomFieldCreatePayload,
    DefinitionKind.FORM_LAYOUT: FormLayoutCreatePayload,
    DefinitionKind.TEMPLATE: TemplateCreatePayload,
    DefinitionKind.FORM: FormCreatePayload,
}

UPDATE_SCHEMAS: dict[DefinitionKind, type[BaseModel]] = {
    DefinitionKind.COLLECTION: CollectionUpdatePayload,
    DefinitionKind.CUSTOM_FIELD: CustomFieldUpdatePayload,
    DefinitionKind.FORM_LAYOUT: FormLayoutUpdatePayload,
    DefinitionKind.TEMPLATE: TemplateUpdatePayload,
    DefinitionKind.FORM: FormUpdatePayload,
}


def normalize_name(kind: DefinitionKind, name: str) -> str:
    """规范化定义名称: 去除首尾空白, 表单名称额外转为大写."""
    normalized = name.strip()
    if kind == DefinitionKind.FORM:
        return normalized.upper()
    return normalized


def apply_partial_update(kind: DefinitionKind, existing: Mapping[str, Any], patch: object) -> dict[str, Any]:
    """把 patch 按种类的更新规则合并到 existing, 返回新的文档.

    patch 先经过更新 schema 校验(枚举值/字段定义同样在此校验), 白名单外的键被忽略.
    名称键若被修改, 合并前先做规范化.
    """
    payload = validate_or_raise(UPDATE_SCHEMAS[kind], patch)
    changes = payload.to_changes()

    name_key = DEFINITION_NAME_KEYS[kind]
    if name_key in changes:
        changes[name_key] = normalize_name(kind, changes[name_key])

    return {**existing, **changes}


class DefinitionRegistry:
    """定义注册表: schema 分派、名称规范化与唯一性检查."""

    def __init__(self, repositories: Mapping[DefinitionKind, DefinitionsRepository] | None = None) -> None:
        self._repositories: dict[DefinitionKind, DefinitionsRepository] = dict(repositories or {})

    def repository(self, kind: DefinitionKind) -> DefinitionsRepository:
        if kind not in self._repositories:
            self._repositories[kind] = DefinitionsRepository(kind)
        return self._repositories[kind]

    @staticmethod
    def normalize_name(kind: DefinitionKind, name: str) -> str:
        return normalize_name(kind, name)

    @staticmethod
    def apply_partial_update(kind: DefinitionKind, existing: Mapping[str, Any], patch: object) -> dict[str, Any]:
        return apply_partial_update(kind, existing, patch)

    def validate_create(self, kind: DefinitionKind, payload: object) -> dict[str, Any]:
        """校验创建 payload 并返回规范化后的存储文档."""
        validated = validate_or_raise(CREATE_SCHEMAS[kind], payload)
        document = validated.to_document()
        name_key = DEFINITION_NAME_KEYS[kind]
        document[name_key] = normalize_name(kind, document[name_key])
        return document

    def check_unique_name(self, kind: DefinitionKind, name: str, *, exclude_id: int | None = None) -> str:
        """检查名称唯一性, 返回规范化后的名称.

        每次都重新查询存储, 不缓存; 最终仍以数据库唯一约束为准.

        Raises:
            DuplicateNameError: 同种类下已存在同名定义.
            StorageUnavailableError: 查询失败.

        """
        normalized = normalize_name(kind, name)
        try:
            existing = self.repository(kind).find_by_name(normalized, exclude_id=exclude_id)
        except StorageError as exc:
            raise self.translate_storage_error(kind, exc, name=normalized) from exc
        if existing is not None:
            raise self.duplicate_name_error(kind, normalized)
        return normalized

    @staticmethod
    def duplicate_name_error(kind: DefinitionKind, name: str) -> DuplicateNameError:
        return DuplicateNameError(
            f"{DEFINITION_DISPLAY_NAMES[kind]}名称已存在: {name}",
            extra={"kind": kind.value, "name": name, "field": DEFINITION_NAME_KEYS[kind]},
        )

    def translate_storage_error(
        self,
        kind: DefinitionKind,
        exc: StorageError,
        *,
        name: str | None = None,
    ) -> DuplicateNameError | StorageUnavailableError:
        """唯一约束冲突映射为 DuplicateNameError, 其余存储故障映射为 StorageUnavailableError."""
        if isinstance(exc, DuplicateKeyError) and name is not None:
            return self.duplicate_name_error(kind, name)
        return StorageUnavailableError(extra={"kind": kind.value, "operation": exc.operation})


__all__ = [
    "CREATE_SCHEMAS",
    "UPDATE_SCHEMAS",
    "DefinitionRegistry",
    "apply_partial_update",
    "normalize_name",
]
