"""结构化日志辅助子模块."""
