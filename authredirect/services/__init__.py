"""AuthRedirect - 业务服务层."""
