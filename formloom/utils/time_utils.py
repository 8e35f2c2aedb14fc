"""统一时间处理工具模块.

数据库中的时间统一按 UTC 存储,对外序列化为 ISO8601 字符串.
"""

from __future__ import annotations

from datetime import UTC, datetime


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间.

        Returns:
            带 UTC 时区信息的当前时间.

        """
        return datetime.now(UTC)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """为无时区信息的时间补齐 UTC.

        SQLite 等后端读回的 DateTime 不携带时区,按存储约定视为 UTC.
        """
        if dt.tzinfo is None:
            return dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)

    def to_iso(self, dt: datetime | None) -> str | None:
        """格式化为 ISO8601 字符串,空值原样返回."""
        if dt is None:
            return None
        return self.ensure_utc(dt).isoformat()


time_utils = TimeUtils()

__all__ = ["TimeUtils", "time_utils"]
