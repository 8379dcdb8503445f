"""AuthRedirect - HTTP 路由(蓝图)."""
