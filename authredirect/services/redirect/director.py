"""AuthRedirect - 跳转策略编排.

按调用方配置的顺序依次尝试各提取策略,返回第一个非空结果;全部为空时回退到 `/`.
策略顺序是部署策略(反向代理模式/直连模式),与提取逻辑本身解耦.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from werkzeug.exceptions import BadRequest, RequestEntityTooLarge

from authredirect.constants import RedirectSource
from authredirect.core.exceptions import ConfigurationError, RedirectResolutionError

if TYPE_CHECKING:
    from werkzeug.wrappers import Request

    from authredirect.services.redirect.resolver import RedirectResolver

DEFAULT_REDIRECT = "/"

RedirectGetter = Callable[["Request"], str]


def default_strategies(*, reverse_proxy: bool) -> tuple[RedirectSource, ...]:
    """返回部署模式对应的默认策略顺序.

    Args:
        reverse_proxy: 是否运行在可信反向代理之后.

    Returns:
        反向代理模式下包含 `X-Forwarded-*` 策略,直连模式下不包含.

    """
    if reverse_proxy:
        return (
            RedirectSource.RD_QUERYSTRING,
            RedirectSource.X_AUTH_REQUEST_REDIRECT,
            RedirectSource.X_FORWARDED_HEADERS,
            RedirectSource.REQUEST_URI,
        )
    return (
        RedirectSource.RD_QUERYSTRING,
        RedirectSource.X_AUTH_REQUEST_REDIRECT,
        RedirectSource.REQUEST_URI,
    )


def _coerce_sources(strategies: Iterable[RedirectSource | str]) -> tuple[RedirectSource, ...]:
    sources: list[RedirectSource] = []
    for item in strategies:
        try:
            sources.append(RedirectSource(item))
        except ValueError as exc:
            raise ConfigurationError(
                f"未知的跳转策略: {item}",
                extra={"strategy": str(item)},
            ) from exc
    if not sources:
        raise ConfigurationError("跳转策略列表不能为空")
    return tuple(sources)


@dataclass(frozen=True, slots=True, init=False)
class RedirectDirector:
    """按顺序执行跳转策略的编排器.

    Args:
        resolver: 提供各策略实现的解析器.
        strategies: 策略标识序列,按优先级从高到低.

    """

    resolver: RedirectResolver
    strategies: tuple[RedirectSource, ...]

    def __init__(self, resolver: RedirectResolver, strategies: Iterable[RedirectSource | str]) -> None:
        object.__setattr__(self, "resolver", resolver)
        object.__setattr__(self, "strategies", _coerce_sources(strategies))

    def getter_for(self, source: RedirectSource) -> RedirectGetter:
        """返回策略标识对应的解析器方法."""
        getters: dict[RedirectSource, RedirectGetter] = {
            RedirectSource.RD_QUERYSTRING: self.resolver.get_rd_querystring_redirect,
            RedirectSource.X_AUTH_REQUEST_REDIRECT: self.resolver.get_x_auth_request_redirect,
            RedirectSource.X_FORWARDED_HEADERS: self.resolver.get_x_forwarded_headers_redirect,
            RedirectSource.REQUEST_URI: self.resolver.get_uri_redirect,
        }
        return getters[source]

    def get_redirect(self, request: Request) -> str:
        """解析当前请求登录后的跳转地址.

        Args:
            request: 当前请求.

        Returns:
            第一个非空的策略结果,全部为空时返回 `/`.

        Raises:
            RedirectResolutionError: 请求表单无法解析(格式损坏或超出大小限制)时抛出.

        """
        try:
            # 统一在入口解析表单,解析失败转换为领域异常
            _ = request.values
        except (BadRequest, RequestEntityTooLarge) as exc:
            raise RedirectResolutionError(extra={"reason": exc.description}) from exc

        for source in self.strategies:
            redirect = self.getter_for(source)(request)
            if redirect:
                return redirect
        return DEFAULT_REDIRECT


__all__ = ["DEFAULT_REDIRECT", "RedirectDirector", "RedirectGetter", "default_strategies"]
