"""常量模块。

集中管理系统常量，包括错误消息、HTTP 相关常量与定义模型枚举。
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

from .definition_types import (
    CHOICE_FIELD_KINDS,
    CREATABLE_LAYOUT_TYPES,
    DEFAULT_FORM_STYLES,
    DEFINITION_DISPLAY_NAMES,
    DEFINITION_NAME_KEYS,
    DefinitionKind,
    FieldKind,
    LayoutType,
    LovStatus,
    LovType,
)
from .http_headers import HttpHeaders
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    SuccessMessages,
)

__all__ = [
    "CHOICE_FIELD_KINDS",
    "CREATABLE_LAYOUT_TYPES",
    "DEFAULT_FORM_STYLES",
    "DEFINITION_DISPLAY_NAMES",
    "DEFINITION_NAME_KEYS",
    "DefinitionKind",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FieldKind",
    "HttpHeaders",
    "HttpStatus",
    "LayoutType",
    "LovStatus",
    "LovType",
    "SuccessMessages",
]
