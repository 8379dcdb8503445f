"""AuthRedirect - 登录后跳转地址的候选提取策略.

每个策略都是 `(request) -> str` 的纯函数: 返回空字符串表示该来源没有可用候选,
非空结果一定已经通过 `RedirectValidator` 校验(`get_uri_redirect` 的请求自身 URI 兜底除外,
它直接取自当前请求,必然是站内路径).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from authredirect.constants import RD_QUERY_PARAM, HttpHeaders
from authredirect.utils.redirect_safety import RedirectValidator
from authredirect.utils.request_utils import (
    get_literal_request_uri,
    get_request_host,
    get_request_prefix,
    get_request_proto,
    get_request_uri,
    is_forwarded_request,
)

if TYPE_CHECKING:
    from werkzeug.wrappers import Request


@dataclass(frozen=True, slots=True)
class RedirectResolver:
    """持有保留前缀与校验器的跳转候选解析器.

    启动时构造一次,之后只读,可被任意数量的请求线程并发使用.

    Args:
        proxy_prefix: 代理自身端点(登录、回调、静态资源)的保留路径前缀,例如 `/oauth2`.
        validator: 跳转目标校验器.

    """

    proxy_prefix: str
    validator: RedirectValidator = field(default_factory=RedirectValidator)

    def __post_init__(self) -> None:
        normalized = "/" + self.proxy_prefix.strip().strip("/")
        object.__setattr__(self, "proxy_prefix", normalized)

    def has_proxy_prefix(self, path: str) -> bool:
        """判断路径是否落在保留前缀之下(按路径段边界匹配).

        `/oauth2`、`/oauth2/callback` 命中前缀 `/oauth2`,
        `/oauth2-evil`、`/oauth2evil/x` 不命中.
        按原始字符串比较,不解码 `%2F` 等百分号编码的分隔符.
        """
        if self.proxy_prefix == "/":
            return path.startswith("/")
        bare_path = path.split("?", 1)[0].split("#", 1)[0]
        return bare_path == self.proxy_prefix or bare_path.startswith(f"{self.proxy_prefix}/")

    def get_rd_querystring_redirect(self, request: Request) -> str:
        """`rd` 查询参数(或表单字段)中的跳转地址."""
        return self.validator.validate(
            request.values.get(RD_QUERY_PARAM, ""),
            "Invalid redirect provided in rd querystring parameter: %s",
        )

    def get_x_auth_request_redirect(self, request: Request) -> str:
        """`X-Auth-Request-Redirect` 请求头中的跳转地址."""
        return self.validator.validate(
            request.headers.get(HttpHeaders.X_AUTH_REQUEST_REDIRECT, ""),
            "Invalid redirect provided in X-Auth-Request-Redirect header: %s",
        )

    def get_x_forwarded_headers_redirect(self, request: Request) -> str:
        """由 `X-Forwarded-(Proto|Host|Prefix|Uri)` 还原客户端视角的原始地址.

        非转发请求直接返回空字符串,不做校验. `Uri` 落在保留前缀下时只保留挂载前缀,
        避免把用户送回代理自身的端点.
        """
        if not is_forwarded_request(request):
            return ""

        uri = get_request_uri(request)
        prefix = get_request_prefix(request)
        if self.has_proxy_prefix(uri):
            uri = prefix
        elif prefix != "/":
            uri = prefix.rstrip("/") + uri

        redirect = f"{get_request_proto(request)}://{get_request_host(request)}{uri}"
        return self.validator.validate(
            redirect,
            "Invalid redirect generated from X-Forwarded-* headers: %s",
        )

    def get_uri_redirect(self, request: Request) -> str:
        """兜底策略: `X-Forwarded-Uri` 或请求自身 URI,落在保留前缀下时返回 `/`."""
        redirect = self.validator.validate(
            get_request_uri(request),
            "Invalid redirect generated from X-Forwarded-Uri header: %s",
        )
        if not redirect:
            redirect = get_literal_request_uri(request)

        if self.has_proxy_prefix(redirect):
            return "/"
        return redirect


__all__ = ["RedirectResolver"]
