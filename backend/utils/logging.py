"""
Logging Utilities - 日志工具

架构说明：
- get_logger() 是无依赖的，可以被任何模块安全导入
- setup_logging() 在应用工厂中根据 Settings 调用
- 所有应用日志器挂在 "gutcare" 日志树下
"""

import logging
import sys

ROOT_LOGGER_NAME = "gutcare"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """获取日志器（无依赖，可安全导入）

    模块名会被挂到 gutcare 日志树下，例如 ``domains.identity`` 变为
    ``gutcare.domains.identity``。
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(log_level: str = "INFO", is_development: bool = False) -> None:
    """设置日志

    Args:
        log_level: 日志级别
        is_development: 开发环境下使用 DEBUG 级别
    """
    level = logging.DEBUG if is_development else getattr(logging, log_level.upper(), logging.INFO)

    # 配置应用日志器（不干扰 uvicorn 的日志）
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(level)

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)
        app_logger.propagate = False  # 不传播到根日志器，避免重复

    # 第三方库日志级别
    for noisy in ("sqlalchemy", "httpx", "LiteLLM"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

