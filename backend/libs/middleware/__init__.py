"""
Middleware - 中间件

- logging: 请求日志
"""

from libs.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
