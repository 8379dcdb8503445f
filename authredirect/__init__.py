"""AuthRedirect - Flask 应用初始化.

认证反向代理的登录后跳转地址解析服务.
"""

import logging
import sys
from importlib import import_module

from flask import Blueprint, Flask
from flask.typing import ResponseReturnValue

from authredirect.constants import RedirectSource
from authredirect.core.exceptions import ConfigurationError
from authredirect.services.redirect import RedirectDirector, RedirectResolver, default_strategies
from authredirect.settings import Settings
from authredirect.utils.proxy_fix_middleware import ReverseProxyScope
from authredirect.utils.redirect_safety import RedirectValidator
from authredirect.utils.response_utils import jsonify_unified_error
from authredirect.utils.structlog_config import configure_structlog, get_system_logger


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    Raises:
        ConfigurationError: 跳转策略配置非法时抛出.

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    app.config.from_mapping(resolved_settings.to_flask_config())

    # 构造跳转解析组件(启动后只读)
    initialize_redirect_components(app, resolved_settings)

    # 标记可信反向代理请求
    app.wsgi_app = ReverseProxyScope(  # type: ignore[method-assign]
        app.wsgi_app,
        enabled=resolved_settings.reverse_proxy,
        trusted_proxy_ips=resolved_settings.trusted_proxy_ips,
    )

    # 注册蓝图
    configure_blueprints(app, resolved_settings)

    # 配置日志
    configure_logging(app)
    configure_structlog(app)

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        return jsonify_unified_error(error)

    get_system_logger().info(
        "跳转解析服务初始化完成",
        proxy_prefix=resolved_settings.proxy_prefix,
        reverse_proxy=resolved_settings.reverse_proxy,
        strategies=[source.value for source in app.extensions["authredirect"]["director"].strategies],
    )
    return app


def initialize_redirect_components(app: Flask, settings: Settings) -> None:
    """构造校验器、解析器与编排器并挂到 `app.extensions`.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象.

    """
    validator = RedirectValidator(whitelist_domains=settings.whitelist_domains)
    resolver = RedirectResolver(proxy_prefix=settings.proxy_prefix, validator=validator)
    strategies = settings.redirect_sources or default_strategies(reverse_proxy=settings.reverse_proxy)
    if not settings.reverse_proxy and RedirectSource.X_FORWARDED_HEADERS in strategies:
        # 未启用反向代理时该策略永远为空,属于配置失误
        raise ConfigurationError("REDIRECT_STRATEGIES 包含 x_forwarded_headers,但未启用 REVERSE_PROXY")
    app.extensions["authredirect"] = {
        "validator": validator,
        "resolver": resolver,
        "director": RedirectDirector(resolver, strategies),
    }


def configure_blueprints(app: Flask, settings: Settings) -> None:
    """注册所有蓝图以暴露路由.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,提供保留前缀.

    """
    blueprint_specs: list[tuple[str, str, str]] = [
        ("authredirect.routes.oauth2", "oauth2_bp", settings.proxy_prefix),
        ("authredirect.routes.health", "health_bp", "/health"),
    ]
    for module_path, attr_name, prefix in blueprint_specs:
        module = import_module(module_path)
        blueprint: Blueprint = getattr(module, attr_name)
        app.register_blueprint(blueprint, url_prefix=prefix)


def configure_logging(app: Flask) -> None:
    """配置标准库日志输出(structlog 经 stdlib LoggerFactory 输出).

    Args:
        app: Flask 应用实例.

    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    root_logger.setLevel(getattr(logging, log_level_name, logging.INFO))
