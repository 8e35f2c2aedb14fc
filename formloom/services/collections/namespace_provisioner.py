"""集合物理命名空间的开辟.

集合创建成功后, 尽力为其创建一张同名(带前缀)的数据表.
该步骤不影响集合本身: 表已存在视为成功, 其余失败只记录日志.
"""

from __future__ import annotations

import hashlib
import re

from flask import current_app
from sqlalchemy import JSON, Column, DateTime, Integer, MetaData, Table
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from formloom import db
from formloom.types.definitions import NamespaceProvisionOutcome
from formloom.utils.structlog_config import log_info, log_warning
from formloom.utils.time_utils import time_utils

_UNSAFE_CHARS = re.compile(r"[^a-z0-9_]+")
_MAX_TABLE_NAME_LENGTH = 63
_DIGEST_LENGTH = 8


def build_table_name(prefix: str, name: str) -> str:
    """集合名称转为表名: 小写, 非字母数字替换为下划线.

    名称本身已是合法表名时原样使用; 否则(大小写/字符被改写或被截断)
    追加原始名称的短摘要, 保证不同集合名称不会落到同一张表.
    """
    sanitized = _UNSAFE_CHARS.sub("_", name.strip().lower()).strip("_")
    if not sanitized:
        return ""
    table_name = f"{prefix}{sanitized}"
    if sanitized == name and len(table_name) <= _MAX_TABLE_NAME_LENGTH:
        return table_name
    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]
    head = table_name[: _MAX_TABLE_NAME_LENGTH - _DIGEST_LENGTH - 1].rstrip("_")
    return f"{head}_{digest}"


def _is_already_exists(exc: SQLAlchemyError) -> bool:
    original = getattr(exc, "orig", None) or exc
    return "already exists" in str(original).lower()


class NamespaceProvisioner:
    """为集合创建物理存储命名空间(数据表)."""

    def __init__(
        self,
        *,
        engine: Engine | None = None,
        enabled: bool | None = None,
        table_prefix: str | None = None,
    ) -> None:
        self._engine = engine
        self._enabled = enabled
        self._table_prefix = table_prefix

    @property
    def enabled(self) -> bool:
        if self._enabled is not None:
            return self._enabled
        return bool(current_app.config.get("NAMESPACE_PROVISIONING_ENABLED", True))

    @property
    def table_prefix(self) -> str:
        if self._table_prefix is not None:
            return self._table_prefix
        return str(current_app.config.get("NAMESPACE_TABLE_PREFIX", "ns_"))

    @property
    def engine(self) -> Engine:
        return self._engine or db.engine

    def create_namespace(self, name: str) -> NamespaceProvisionOutcome:
        """创建命名空间, 从不抛出异常.

        Returns:
            status 为 created/exists/skipped/failed 之一.

        """
        if not self.enabled:
            return NamespaceProvisionOutcome(name=name, status="skipped", message="namespace provisioning disabled")

        table_name = build_table_name(self.table_prefix, name)
        if not table_name:
            log_warning("集合名称无法转换为表名", module="collections", collection_name=name)
            return NamespaceProvisionOutcome(name=name, status="failed", message="invalid namespace name")

        table = self._build_table(table_name)
        try:
            with self.engine.begin() as connection:
                table.create(connection)
        except SQLAlchemyError as exc:
            if _is_already_exists(exc):
                log_info("集合命名空间已存在", module="collections", collection_name=name, table_name=table_name)
                return NamespaceProvisionOutcome(name=name, status="exists", message=table_name)
            log_warning(
                "创建集合命名空间失败",
                module="collections",
                exception=exc,
                collection_name=name,
                table_name=table_name,
            )
            return NamespaceProvisionOutcome(name=name, status="failed", message=str(exc))

        log_info("创建集合命名空间成功", module="collections", collection_name=name, table_name=table_name)
        return NamespaceProvisionOutcome(name=name, status="created", message=table_name)

    @staticmethod
    def _build_table(table_name: str) -> Table:
        # 独立 MetaData, 不参与 db.create_all()
        return Table(
            table_name,
            MetaData(),
            Column("id", Integer, primary_key=True),
            Column("submission_id", Integer, nullable=True, index=True),
            Column("data", JSON, nullable=False, default=dict),
            Column("created_at", DateTime(timezone=True), default=time_utils.now),
        )


__all__ = ["NamespaceProvisioner", "build_table_name"]
