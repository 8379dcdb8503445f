"""AuthRedirect 项目的结构化日志配置与辅助函数."""

from __future__ import annotations

import sys
import uuid
from typing import TYPE_CHECKING, Any, cast

import structlog
from flask import Flask, current_app, has_request_context, request

from authredirect.constants import HttpHeaders
from authredirect.settings import APP_VERSION
from authredirect.utils.logging.context_vars import request_id_var

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, EventDict, Processor


class StructlogConfig:
    """structlog 配置核心类.

    负责配置 structlog 的处理器链与日志工厂,多次调用只会配置一次.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure()
        >>> logger = get_logger('redirect')

    """

    def __init__(self) -> None:
        self.configured = False

    def configure(self) -> None:
        """初始化 structlog 处理器(幂等)."""
        if self.configured:
            return
        processors = [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            self._add_request_context,
            self._add_global_context,
            self._get_console_renderer(),
        ]
        structlog.configure(
            processors=cast("list[Processor]", processors),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self.configured = True

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """向事件字典写入请求上下文.

        Args:
            _logger: 当前 logger 实例.
            _method_name: 调用的方法名.
            event_dict: structlog 事件字典.

        Returns:
            包含 request_id/path 的事件字典.

        """
        if has_request_context():
            event_dict["request_id"] = request_id_var.get()
            event_dict["path"] = request.path
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """附加应用名、版本等全局上下文."""
        try:
            event_dict["app_name"] = current_app.config["APP_NAME"]
            event_dict["app_version"] = current_app.config["APP_VERSION"]
        except (RuntimeError, KeyError):
            event_dict["app_name"] = "AuthRedirect"
            event_dict["app_version"] = APP_VERSION

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    @staticmethod
    def _get_console_renderer() -> Processor:
        """根据终端能力返回渲染器."""
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


structlog_config = StructlogConfig()


def get_logger(name: str) -> Any:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('redirect')
        >>> logger.warning('拒绝不安全的重定向目标', redirect='https://evil.example')

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def get_system_logger() -> Any:
    """返回系统级 logger."""
    return get_logger("system")


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册 Flask 钩子.

    每个请求在 before_request 中绑定 request_id(优先沿用上游的 `X-Request-ID`).

    Args:
        app: Flask 应用实例.

    """
    structlog_config.configure()

    @app.before_request
    def bind_request_id() -> None:
        incoming = request.headers.get(HttpHeaders.X_REQUEST_ID, "").strip()
        request_id_var.set(incoming or uuid.uuid4().hex)

    @app.teardown_request
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))
        request_id_var.set(None)


__all__ = [
    "StructlogConfig",
    "configure_structlog",
    "get_logger",
    "get_system_logger",
    "structlog_config",
]
