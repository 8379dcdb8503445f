"""工具模块.

主要工具:
- redirect_safety: 重定向目标安全校验
- request_utils: 反向代理转发头读取
- proxy_fix_middleware: 可信代理范围标记中间件
- response_utils: 统一响应结构
- structlog_config: 结构化日志配置
"""
