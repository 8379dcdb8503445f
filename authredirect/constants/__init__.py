"""常量模块。

集中管理 HTTP 头、错误消息与重定向来源等常量。

主要常量：
- HttpHeaders: HTTP 头名称常量
- HttpStatus: HTTP 状态码常量
- ErrorCategory / ErrorSeverity / ErrorMessages: 错误元数据
- RedirectSource: 重定向候选来源标识
"""

from http import HTTPStatus as HttpStatus

from .http_headers import HttpHeaders
from .redirect_sources import DEFAULT_PROXY_PREFIX, RD_QUERY_PARAM, RedirectSource
from .system_constants import ErrorCategory, ErrorMessages, ErrorSeverity, SuccessMessages

__all__ = [
    "DEFAULT_PROXY_PREFIX",
    "RD_QUERY_PARAM",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpHeaders",
    "HttpStatus",
    "RedirectSource",
    "SuccessMessages",
]
