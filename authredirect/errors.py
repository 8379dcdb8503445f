"""AuthRedirect - 异常到 HTTP 状态码的映射.

领域异常定义见 `authredirect.core.exceptions`,本模块只处理 HTTP 边界.
"""

from __future__ import annotations

from werkzeug.exceptions import HTTPException

from authredirect.constants import HttpStatus
from authredirect.core.exceptions import (
    AppError,
    ConfigurationError,
    RedirectResolutionError,
    ValidationError,
)

EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    RedirectResolutionError: HttpStatus.BAD_REQUEST,
    ValidationError: HttpStatus.BAD_REQUEST,
    ConfigurationError: HttpStatus.INTERNAL_SERVER_ERROR,
    AppError: HttpStatus.INTERNAL_SERVER_ERROR,
}


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码.

    Args:
        error: 捕获到的异常对象.
        default: 无法匹配时的默认状态码.

    Returns:
        int: 与异常对应的 HTTP 状态码.

    """
    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    for exc_type, status in EXCEPTION_STATUS_MAP.items():
        if isinstance(error, exc_type):
            return int(status)
    return int(default)


__all__ = ["EXCEPTION_STATUS_MAP", "map_exception_to_status"]
