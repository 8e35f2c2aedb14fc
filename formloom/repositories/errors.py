"""存储层异常.

Repository 只暴露两类失败: 唯一约束冲突(可区分)与其他存储故障,
由上层决定映射为 DuplicateNameError 还是 StorageUnavailableError.
"""

from __future__ import annotations


class StorageError(Exception):
    """存储层故障."""

    code = "storage_error"

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class DuplicateKeyError(StorageError):
    """唯一约束冲突."""

    code = "duplicate_key"


__all__ = ["DuplicateKeyError", "StorageError"]
