"""系统常量.

错误分类、严重度与统一提示文案.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    SECURITY = "security"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "请求参数校验失败"
    CONFIGURATION_ERROR = "服务配置错误"
    REDIRECT_RESOLUTION_FAILED = "无法解析登录后的跳转地址"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"
    REDIRECT_RESOLVED = "跳转地址解析成功"
    HEALTH_CHECK_OK = "健康检查成功"
