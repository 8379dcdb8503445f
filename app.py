"""AuthRedirect - 本地开发环境启动文件."""

from __future__ import annotations

import os
from typing import Final

from authredirect import create_app
from authredirect.utils.structlog_config import get_system_logger

os.environ.setdefault("FLASK_ENV", "development")

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[str] = "4180"
DEFAULT_DEBUG: Final[str] = "true"


def _load_runtime_config() -> tuple[str, int, bool]:
    """读取开发服务器运行参数."""
    host = os.environ.get("FLASK_HOST") or DEFAULT_HOST
    port = int(os.environ.get("FLASK_PORT", DEFAULT_PORT))
    debug = os.environ.get("FLASK_DEBUG", DEFAULT_DEBUG).lower() == "true"
    return host, port, debug


def main() -> None:
    """启动 Flask 开发服务器并打印访问入口."""
    app = create_app()
    host, port, debug = _load_runtime_config()
    prefix = app.config["PROXY_PREFIX"]
    logger = get_system_logger()
    logger.info("AuthRedirect 开发环境已启动", host=host, port=port, debug=debug)
    logger.info("跳转解析", url=f"http://{host}:{port}{prefix}/redirect?rd=/")
    logger.info("健康检查", url=f"http://{host}:{port}/health/ping")

    app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()
