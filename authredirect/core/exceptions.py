"""AuthRedirect - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射在 HTTP 边界完成(见 `authredirect/errors.py`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from authredirect.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: dict[str, Any] | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class ConfigurationError(AppError):
    """表示跳转策略等启动期配置非法."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="CONFIGURATION_ERROR",
    )


class RedirectResolutionError(ValidationError):
    """表示请求本身无法解析(例如表单体损坏或超限),无法得出跳转地址."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="REDIRECT_RESOLUTION_FAILED",
    )


__all__ = [
    "AppError",
    "ConfigurationError",
    "ExceptionMetadata",
    "RedirectResolutionError",
    "ValidationError",
]
