"""AuthRedirect - 反向代理范围标记中间件.

在反向代理(例如 Nginx)场景下,仅当请求来自可信代理地址时才信任其 `X-Forwarded-*` 头部.
"""

from __future__ import annotations

from collections.abc import Iterable
from wsgiref.types import StartResponse, WSGIApplication, WSGIEnvironment

REVERSE_PROXY_ENVIRON_KEY = "authredirect.reverse_proxy"


class ReverseProxyScope:
    """仅对可信代理来源请求标记反向代理范围的 WSGI 中间件.

    说明:
    - `X-Forwarded-*` 头部可被任意客户端伪造,若应用端口被直连暴露,攻击者即可借此
      构造指向任意主机的跳转地址.
    - 本中间件通过 `REMOTE_ADDR` 白名单,仅对来自可信代理地址的请求在 environ 中写入
      `authredirect.reverse_proxy` 标记,`request_utils` 只在标记存在时读取转发头.
    - 白名单为空时信任所有来源(由部署方保证应用端口不对外暴露).

    Args:
        app: 原始 WSGI 应用.
        enabled: 是否启用反向代理模式,关闭时不标记任何请求.
        trusted_proxy_ips: 可信代理 IP 集合.

    """

    def __init__(
        self,
        app: WSGIApplication,
        *,
        enabled: bool,
        trusted_proxy_ips: Iterable[str] = (),
    ) -> None:
        """初始化中间件."""
        self._app = app
        self._enabled = enabled
        self._trusted_proxy_ips = frozenset(trusted_proxy_ips)

    def is_trusted(self, environ: WSGIEnvironment) -> bool:
        """判断当前请求是否来自可信反向代理."""
        if not self._enabled:
            return False
        if not self._trusted_proxy_ips:
            return True
        remote_addr = environ.get("REMOTE_ADDR")
        return isinstance(remote_addr, str) and remote_addr in self._trusted_proxy_ips

    def __call__(self, environ: WSGIEnvironment, start_response: StartResponse) -> Iterable[bytes]:
        """WSGI 调用入口,对可信代理写入反向代理标记."""
        environ[REVERSE_PROXY_ENVIRON_KEY] = self.is_trusted(environ)
        return self._app(environ, start_response)


__all__ = ["REVERSE_PROXY_ENVIRON_KEY", "ReverseProxyScope"]
