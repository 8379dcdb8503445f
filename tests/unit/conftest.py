# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与请求构造相关的通用 fixtures。
"""

from collections.abc import Callable, Mapping

import pytest
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Request

from authredirect.utils.proxy_fix_middleware import REVERSE_PROXY_ENVIRON_KEY

_ISOLATED_ENV_VARS = (
    "PROXY_PREFIX",
    "REVERSE_PROXY",
    "TRUSTED_PROXY_IPS",
    "WHITELIST_DOMAINS",
    "REDIRECT_STRATEGIES",
    "LOG_LEVEL",
    "FLASK_DEBUG",
)


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    避免开发者本机环境变量影响测试稳定性.
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    for name in _ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """构造 werkzeug Request,`proxied=True` 时模拟经由可信反向代理转发."""

    def _make(
        path: str = "/",
        *,
        method: str = "GET",
        query_string: str | Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        proxied: bool = False,
        base_url: str = "http://proxy.internal",
        environ_overrides: Mapping[str, object] | None = None,
    ) -> Request:
        overrides: dict[str, object] = {REVERSE_PROXY_ENVIRON_KEY: proxied}
        overrides.update(environ_overrides or {})
        builder = EnvironBuilder(
            path=path,
            method=method,
            query_string=query_string,
            headers=dict(headers or {}),
            data=dict(data) if data is not None else None,
            base_url=base_url,
            environ_overrides=overrides,
        )
        try:
            return Request(builder.get_environ())
        finally:
            builder.close()

    return _make
