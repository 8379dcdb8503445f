"""重定向候选来源常量."""

from __future__ import annotations

from enum import StrEnum
from typing import Final

RD_QUERY_PARAM: Final[str] = "rd"
DEFAULT_PROXY_PREFIX: Final[str] = "/oauth2"


class RedirectSource(StrEnum):
    """重定向候选来源.

    取值即 `REDIRECT_STRATEGIES` 配置中使用的标识.
    """

    RD_QUERYSTRING = "rd_querystring"
    X_AUTH_REQUEST_REDIRECT = "x_auth_request_redirect"
    X_FORWARDED_HEADERS = "x_forwarded_headers"
    REQUEST_URI = "request_uri"
