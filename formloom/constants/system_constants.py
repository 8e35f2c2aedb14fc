"""表单工坊 - 常量定义模块

统一管理错误分类、严重度与对外文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    DATABASE = "database"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    RESOURCE_NOT_FOUND = "资源不存在"
    INVALID_REQUEST = "无效的请求"
    JSON_REQUIRED = "请求必须是JSON格式"
    MISSING_REQUIRED_FIELDS = "缺少必需字段: {fields}"

    # 定义相关错误
    INVALID_ENUM = "取值不在允许范围内"
    DUPLICATE_NAME = "名称已存在"
    FIELD_DEFINITION_INVALID = "字段定义无效"

    # 存储错误
    STORAGE_UNAVAILABLE = "存储服务不可用"
    DATABASE_QUERY_ERROR = "数据库查询错误"
    CONSTRAINT_VIOLATION = "数据约束错误"


# 成功消息常量
class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "SuccessMessages",
]
