"""AuthRedirect - 健康检查路由."""

from flask import Blueprint
from flask.typing import ResponseReturnValue

from authredirect.constants import SuccessMessages
from authredirect.utils.response_utils import jsonify_unified_success

health_bp = Blueprint("health", __name__)


@health_bp.route("/ping")
def ping() -> ResponseReturnValue:
    """存活探针."""
    return jsonify_unified_success(data={"status": "ok"}, message=SuccessMessages.HEALTH_CHECK_OK)
