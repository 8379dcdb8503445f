"""AuthRedirect - 统一响应工具.

提供统一的成功/错误响应结构,避免在路由层散落 JSON 拼装逻辑.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from flask import Response, jsonify

from authredirect.constants import ErrorCategory, ErrorMessages, ErrorSeverity, HttpStatus, SuccessMessages
from authredirect.core.exceptions import AppError
from authredirect.errors import map_exception_to_status
from authredirect.utils.structlog_config import get_logger

JsonDict = dict[str, Any]


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
) -> tuple[JsonDict, int]:
    """生成统一的成功响应载荷.

    Args:
        data: 响应数据,可选.
        message: 成功消息,可选,默认为"操作成功".
        status: HTTP 状态码,默认为 200.

    Returns:
        (响应载荷字典, HTTP 状态码).

    """
    payload: JsonDict = {
        "success": True,
        "error": False,
        "message": str(message) if message is not None else SuccessMessages.OPERATION_SUCCESS,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if data is not None:
        payload["data"] = data
    return payload, status


def unified_error_response(
    error: Exception,
    *,
    status_code: int | None = None,
    extra: Mapping[str, object] | None = None,
) -> tuple[JsonDict, int]:
    """生成统一的错误响应载荷,并按严重度记录日志.

    非 `AppError` 异常不会把原始异常信息暴露给客户端.

    Args:
        error: 异常对象.
        status_code: HTTP 状态码,可选,默认根据异常类型自动映射.
        extra: 额外的错误信息,可选.

    Returns:
        (错误响应载荷字典, HTTP 状态码).

    """
    final_status = status_code or map_exception_to_status(error, default=HttpStatus.INTERNAL_SERVER_ERROR)
    if isinstance(error, AppError):
        category = error.category
        severity = error.severity
        message_code = error.message_key
        message = error.message
        recoverable = error.recoverable
    else:
        category = ErrorCategory.SYSTEM
        severity = ErrorSeverity.HIGH if final_status >= HttpStatus.INTERNAL_SERVER_ERROR else ErrorSeverity.LOW
        message_code = "INTERNAL_ERROR"
        message = getattr(error, "description", None) if final_status < HttpStatus.INTERNAL_SERVER_ERROR else None
        message = message or ErrorMessages.INTERNAL_ERROR
        recoverable = final_status < HttpStatus.INTERNAL_SERVER_ERROR

    payload: JsonDict = {
        "success": False,
        "error": True,
        "error_id": uuid.uuid4().hex[:12],
        "category": category.value,
        "severity": severity.value,
        "message_code": message_code,
        "message": message,
        "timestamp": datetime.now(UTC).isoformat(),
        "recoverable": recoverable,
    }
    extra_payload = dict(extra or {})
    if isinstance(error, AppError) and error.extra:
        extra_payload.update(error.extra)
    if extra_payload:
        payload["extra"] = extra_payload

    logger = get_logger("app")
    log_method = logger.error if severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL) else logger.warning
    log_method(
        "请求处理失败",
        module="system",
        error_id=payload["error_id"],
        category=payload["category"],
        severity=payload["severity"],
        error_type=type(error).__name__,
        exc_info=final_status >= HttpStatus.INTERNAL_SERVER_ERROR,
    )
    return payload, final_status


def jsonify_unified_success(*args: Any, **kwargs: Any) -> tuple[Response, int]:
    """返回 Flask Response 对象的成功响应便捷函数."""
    payload, status = unified_success_response(*args, **kwargs)
    return jsonify(payload), status


def jsonify_unified_error(error: Exception, **kwargs: Any) -> tuple[Response, int]:
    """返回 Flask Response 对象的错误响应便捷函数."""
    payload, status = unified_error_response(error, **kwargs)
    return jsonify(payload), status


__all__ = [
    "jsonify_unified_error",
    "jsonify_unified_success",
    "unified_error_response",
    "unified_success_response",
]
