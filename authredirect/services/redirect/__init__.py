"""登录后跳转地址解析服务."""

from .director import DEFAULT_REDIRECT, RedirectDirector, default_strategies
from .resolver import RedirectResolver

__all__ = ["DEFAULT_REDIRECT", "RedirectDirector", "RedirectResolver", "default_strategies"]
