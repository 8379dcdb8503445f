"""AuthRedirect - 重定向安全工具.

统一校验登录后的跳转目标,避免开放重定向(Open Redirect).

安全定义:
- 以 `/` 开头的站内路径允许跳转,但禁止 `//`、`/\\` 以及 `/./`、`/ /` 等
  可能被浏览器归一化为 scheme-relative URL 的写法.
- `http://` / `https://` 绝对地址仅当主机(及端口)命中白名单时允许,且不得包含反斜杠.
- 任何控制字符(CR/LF/NUL 等)一律拒绝,避免响应头注入.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from authredirect.utils.structlog_config import get_logger

# 斜杠/反斜杠之间夹着空白或 1~2 个点,浏览器可能把它当作 `//host`
_INVALID_SLASH_PATTERN = re.compile(r"[/\\](?:\s*|\.{1,2})[/\\]")
_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
_ABSOLUTE_PREFIXES = ("http://", "https://")


def _split_host_port(entry: str) -> tuple[str, str]:
    """拆分白名单条目为 (host, port),port 可能为空或 `*`."""
    if entry.startswith("["):
        closing = entry.find("]")
        if closing == -1:
            return entry, ""
        host = entry[1:closing]
        rest = entry[closing + 1 :]
        return host, rest[1:] if rest.startswith(":") else ""
    if entry.count(":") == 1:
        host, _, port = entry.partition(":")
        return host, port
    return entry, ""


@dataclass(frozen=True, slots=True)
class RedirectValidator:
    """重定向目标校验器.

    Args:
        whitelist_domains: 允许的绝对地址域名. `example.com` 精确匹配,
            `.example.com` 匹配其自身与所有子域; `host:8080` 仅允许该端口,
            `host:*` 允许任意端口,不带端口时仅允许默认端口.

    """

    whitelist_domains: tuple[str, ...] = field(default=())

    def is_valid_redirect(self, redirect: str) -> bool:
        """判断重定向目标是否安全.

        Args:
            redirect: 候选跳转地址.

        Returns:
            True 表示允许跳转,False 表示应当拒绝.

        """
        if not redirect:
            return False
        if _CONTROL_CHAR_PATTERN.search(redirect):
            return False
        if redirect.startswith("/"):
            return not redirect.startswith("//") and not _INVALID_SLASH_PATTERN.search(redirect)
        if redirect.lower().startswith(_ABSOLUTE_PREFIXES):
            return self._is_whitelisted_absolute(redirect)
        return False

    def _is_whitelisted_absolute(self, redirect: str) -> bool:
        # 浏览器把 http(s) URL 中的 `\` 视为 `/`,会改变实际主机
        if "\\" in redirect:
            return False
        if _INVALID_SLASH_PATTERN.search(redirect.split("://", 1)[1]):
            return False
        try:
            parsed = urlsplit(redirect)
            redirect_port = parsed.port
        except ValueError:
            return False
        if parsed.username or parsed.password:
            return False
        hostname = (parsed.hostname or "").lower()
        if not hostname:
            return False
        port_text = "" if redirect_port is None else str(redirect_port)

        for entry in self.whitelist_domains:
            allowed_host, allowed_port = _split_host_port(entry.strip().lower())
            if not allowed_host:
                continue
            bare_host = allowed_host.lstrip(".")
            host_matches = hostname == bare_host or (
                allowed_host.startswith(".") and hostname.endswith(allowed_host)
            )
            if not host_matches:
                continue
            if allowed_port in {"*", port_text}:
                return True
        return False

    def validate(self, redirect: str, message_format: str) -> str:
        """校验并返回跳转地址.

        Args:
            redirect: 候选跳转地址,可以为空字符串.
            message_format: 拒绝时日志使用的 `%s` 格式串,用于标明候选来源.

        Returns:
            安全时原样返回 `redirect`,否则返回空字符串.

        """
        if self.is_valid_redirect(redirect):
            return redirect
        if redirect:
            get_logger("redirect").warning(
                "拒绝不安全的重定向目标",
                module="redirect",
                message=message_format % redirect,
                redirect=redirect,
            )
        return ""


_LOCAL_ONLY_VALIDATOR = RedirectValidator()


def is_safe_redirect_target(target: str) -> bool:
    """判断重定向目标是否为安全的站内路径(不允许任何绝对地址).

    Args:
        target: 目标 URL,会先 strip.

    Returns:
        True 表示允许跳转,False 表示应当拒绝并回退到安全地址.

    """
    return _LOCAL_ONLY_VALIDATOR.is_valid_redirect(target.strip())


def resolve_safe_redirect_target(target: str | None, *, fallback: str) -> str:
    """解析安全的站内重定向目标,并在不安全时回退到默认地址.

    Args:
        target: 传入的跳转参数.
        fallback: 兜底跳转目标,必须是站内安全路径.

    Returns:
        最终可用于 redirect() 的目标路径.

    """
    if not target:
        return fallback
    normalized = target.strip()
    if not normalized:
        return fallback
    return normalized if is_safe_redirect_target(normalized) else fallback


__all__ = ["RedirectValidator", "is_safe_redirect_target", "resolve_safe_redirect_target"]
