"""AuthRedirect - 反向代理转发头读取.

所有 `X-Forwarded-*` 头部仅在请求被 `ReverseProxyScope` 标记为可信代理转发时才会被读取,
否则一律回退到请求自身的属性.
"""

from __future__ import annotations

from urllib.parse import quote

from werkzeug.wrappers import Request

from authredirect.constants import HttpHeaders
from authredirect.utils.proxy_fix_middleware import REVERSE_PROXY_ENVIRON_KEY

# RFC 3986 path 中允许原样出现的字符,`%` 保留以免重复编码
_PATH_SAFE_CHARS = "/:@!$&'()*+,;=-._~%"


def is_proxied(request: Request) -> bool:
    """请求是否来自可信反向代理."""
    return bool(request.environ.get(REVERSE_PROXY_ENVIRON_KEY, False))


def _forwarded_header(request: Request, name: str) -> str:
    if not is_proxied(request):
        return ""
    return request.headers.get(name, "").strip()


def get_request_proto(request: Request) -> str:
    """返回客户端视角的协议(`X-Forwarded-Proto` 优先)."""
    return _forwarded_header(request, HttpHeaders.X_FORWARDED_PROTO) or request.scheme


def get_request_host(request: Request) -> str:
    """返回客户端视角的主机(`X-Forwarded-Host` 优先)."""
    return _forwarded_header(request, HttpHeaders.X_FORWARDED_HOST) or request.host


def get_request_prefix(request: Request) -> str:
    """返回代理挂载前缀(`X-Forwarded-Prefix`),缺省为 `/`,总是以 `/` 开头."""
    prefix = _forwarded_header(request, HttpHeaders.X_FORWARDED_PREFIX)
    if not prefix:
        return "/"
    return prefix if prefix.startswith("/") else f"/{prefix}"


def get_literal_request_uri(request: Request) -> str:
    """返回请求自身的原始 URI(path + query),不读取任何转发头.

    优先使用 WSGI 服务器保留的原始请求行(gunicorn 的 `RAW_URI`,werkzeug 开发服务器的
    `REQUEST_URI`),否则根据 root_path/path/query_string 重新编码.
    部分环境(如 werkzeug `EnvironBuilder`)写入的原始请求行不含查询串,此时不可直接使用.
    """
    query = request.query_string.decode("latin-1")
    for key in ("RAW_URI", "REQUEST_URI"):
        raw = request.environ.get(key)
        if isinstance(raw, str) and raw.startswith("/") and raw.partition("?")[2] == query:
            return raw

    path = quote(f"{request.root_path}{request.path}", safe=_PATH_SAFE_CHARS) or "/"
    return f"{path}?{query}" if query else path


def get_request_uri(request: Request) -> str:
    """返回客户端视角的请求 URI(`X-Forwarded-Uri` 优先)."""
    return _forwarded_header(request, HttpHeaders.X_FORWARDED_URI) or get_literal_request_uri(request)


def is_forwarded_request(request: Request) -> bool:
    """请求是否经由可信代理转发且客户端视角的主机与代理自身主机不同."""
    return is_proxied(request) and request.host != get_request_host(request)


__all__ = [
    "get_literal_request_uri",
    "get_request_host",
    "get_request_prefix",
    "get_request_proto",
    "get_request_uri",
    "is_forwarded_request",
    "is_proxied",
]
