"""AuthRedirect - 核心共享内核(异常定义等)."""
