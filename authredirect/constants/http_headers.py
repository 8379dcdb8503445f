"""HTTP头常量.

定义常用的HTTP头名称,避免魔法字符串.
"""

from __future__ import annotations


class HttpHeaders:
    """HTTP头常量.

    定义标准和自定义的HTTP头名称.
    """

    # 请求追踪
    X_REQUEST_ID = "X-Request-ID"

    # 反向代理转发头
    X_FORWARDED_PROTO = "X-Forwarded-Proto"
    X_FORWARDED_HOST = "X-Forwarded-Host"
    X_FORWARDED_URI = "X-Forwarded-Uri"
    X_FORWARDED_PREFIX = "X-Forwarded-Prefix"

    # 认证跳转
    X_AUTH_REQUEST_REDIRECT = "X-Auth-Request-Redirect"
