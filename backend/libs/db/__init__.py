"""
Database Module

提供数据库相关的基础设施：
- database: 数据库连接和会话管理
- errors: 连接类错误到 StorageUnavailableError 的转换
"""

from libs.db.database import Base, get_session
from libs.db.errors import storage_guard

__all__ = [
    "Base",
    "get_session",
    "storage_guard",
]
