# tests/integration/conftest.py
"""集成测试专用 fixtures.

通过环境变量构造 Settings,使用 Flask test client 发起真实 WSGI 请求。
"""

import pytest

from authredirect import create_app
from authredirect.settings import Settings


@pytest.fixture
def app_factory(monkeypatch):
    """按给定环境变量创建测试应用实例."""

    def _create(**env: str):
        for name in (
            "PROXY_PREFIX",
            "REVERSE_PROXY",
            "TRUSTED_PROXY_IPS",
            "WHITELIST_DOMAINS",
            "REDIRECT_STRATEGIES",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("FLASK_ENV", "testing")
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        app = create_app(settings=Settings.load())
        app.config["TESTING"] = True
        return app

    return _create


@pytest.fixture
def client(app_factory):
    """直连模式的测试客户端,白名单为 app.example."""
    return app_factory(WHITELIST_DOMAINS="app.example").test_client()


@pytest.fixture
def proxy_client(app_factory):
    """反向代理模式的测试客户端,仅信任 127.0.0.1."""
    return app_factory(
        REVERSE_PROXY="true",
        TRUSTED_PROXY_IPS="127.0.0.1",
        WHITELIST_DOMAINS="app.example",
    ).test_client()
