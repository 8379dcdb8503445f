# Gunicorn配置文件 - 生产环境
# 部署在 Nginx 之后时需设置 REVERSE_PROXY=true 与 TRUSTED_PROXY_IPS

# 服务器套接字
bind = "127.0.0.1:4180"
backlog = 2048

# 工作进程: 跳转解析无阻塞 I/O,使用线程工作器即可
workers = 2
worker_class = "gthread"
threads = 4
timeout = 30
keepalive = 2

# 重启
max_requests = 1000
max_requests_jitter = 50
preload_app = True

# 日志配置(应用日志由 structlog 输出到 stdout)
accesslog = "-"
errorlog = "-"
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# 进程名称
proc_name = "authredirect"

# 环境变量
raw_env = [
    "FLASK_ENV=production",
]

# 安全
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

capture_output = True
