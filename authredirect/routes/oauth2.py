"""AuthRedirect - 保留前缀下的跳转解析路由.

蓝图以 `PROXY_PREFIX`(默认 `/oauth2`)为 url_prefix 注册.
"""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, request
from flask.typing import ResponseReturnValue

from authredirect.constants import HttpStatus, SuccessMessages
from authredirect.services.redirect import RedirectDirector
from authredirect.utils.response_utils import jsonify_unified_success
from authredirect.utils.structlog_config import get_logger

oauth2_bp = Blueprint("oauth2", __name__)

EXTENSION_KEY = "authredirect"


def get_redirect_director() -> RedirectDirector:
    """返回 create_app 中构造的跳转编排器."""
    return current_app.extensions[EXTENSION_KEY]["director"]


@oauth2_bp.route("/redirect", methods=["GET", "POST"])
def resolve_redirect() -> ResponseReturnValue:
    """返回当前请求解析出的登录后跳转地址.

    Returns:
        统一成功响应,`data.redirect` 为最终跳转地址.

    Raises:
        RedirectResolutionError: 请求表单无法解析时抛出,由全局错误处理器转换为 400.

    """
    target = get_redirect_director().get_redirect(request)
    return jsonify_unified_success(data={"redirect": target}, message=SuccessMessages.REDIRECT_RESOLVED)


@oauth2_bp.route("/start")
def start() -> ResponseReturnValue:
    """认证完成后的跳转入口: 302 到解析出的地址."""
    target = get_redirect_director().get_redirect(request)
    get_logger("redirect").info("登录后跳转", module="redirect", redirect=target)
    return redirect(target, code=HttpStatus.FOUND)
