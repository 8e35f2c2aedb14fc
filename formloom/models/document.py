"""定义类模型共享的文档映射.

模型以 snake_case 列存储, 对外统一使用 camelCase 文档键;
`DOCUMENT_COLUMNS` 维护 文档键 -> 属性名 的映射.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from formloom.utils.time_utils import time_utils


class DocumentMixin:
    """提供文档键与列属性之间的双向转换."""

    DOCUMENT_COLUMNS: ClassVar[dict[str, str]] = {}

    def apply_document(self, values: Mapping[str, Any]) -> None:
        """按文档键写入列属性, 未登记的键忽略."""
        for key, value in values.items():
            attr = self.DOCUMENT_COLUMNS.get(key)
            if attr is not None:
                setattr(self, attr, value)

    def to_dict(self) -> dict[str, Any]:
        """序列化为对外文档(camelCase)."""
        payload: dict[str, Any] = {"id": getattr(self, "id", None)}
        for key, attr in self.DOCUMENT_COLUMNS.items():
            payload[key] = getattr(self, attr)
        payload["createdAt"] = time_utils.to_iso(getattr(self, "created_at", None))
        payload["updatedAt"] = time_utils.to_iso(getattr(self, "updated_at", None))
        return payload
