"""表单工坊 - 异常统一出口.

业务代码统一从 `formloom.errors` 引入异常类型, HTTP 映射同样在此转出.
"""

from __future__ import annotations

from formloom.api.error_mapping import map_exception_to_status
from formloom.core.exceptions import (
    AppError,
    ConflictError,
    DatabaseError,
    DuplicateNameError,
    InvalidEnumError,
    NotFoundError,
    StorageUnavailableError,
    SystemError,
    ValidationError,
)

__all__ = [
    "AppError",
    "ConflictError",
    "DatabaseError",
    "DuplicateNameError",
    "InvalidEnumError",
    "NotFoundError",
    "StorageUnavailableError",
    "SystemError",
    "ValidationError",
    "map_exception_to_status",
]
