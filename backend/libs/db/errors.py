"""
Storage Errors - 存储错误转换

把数据库连接类错误转换为 StorageUnavailableError。
日志只记录操作名与用户标识，不记录 SQL 参数。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import InterfaceError, OperationalError

from exceptions import StorageUnavailableError
from utils.logging import get_logger

logger = get_logger(__name__)

CONNECTIVITY_ERRORS: tuple[type[Exception], ...] = (OperationalError, InterfaceError, OSError)


@asynccontextmanager
async def storage_guard(operation: str, identity: str | None = None) -> AsyncIterator[None]:
    """包裹一次仓储操作

    Example:
        async with storage_guard("find_user_by_identity", email):
            result = await self.db.execute(stmt)

    Raises:
        StorageUnavailableError: 数据库不可达
    """
    try:
        yield
    except CONNECTIVITY_ERRORS as e:
        logger.error(
            "Storage unavailable during %s (identity=%s): %s",
            operation,
            identity,
            type(e).__name__,
        )
        raise StorageUnavailableError(operation, original_error=e) from e
