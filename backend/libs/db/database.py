"""
Database Connection Management

使用 SQLAlchemy 2.0 异步模式
"""

from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

from sqlalchemy import exc as sa_exc
from sqlalchemy import make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from libs.db.errors import storage_guard
from utils.logging import get_logger

if TYPE_CHECKING:
    from bootstrap.config import Settings

logger = get_logger(__name__)

# 托管数据库只接受 SSL 连接
REMOTE_DATABASE_HOSTS = ("render.com", "supabase.com", "railway.app", "neon.tech")

# 启用行级安全的表（阻止托管平台的公共 REST 接口直接访问）
ROW_LEVEL_SECURITY_TABLES = ("users", "symptoms")


class Base(DeclarativeBase):
    """SQLAlchemy 模型基类"""

    pass


# 进程级引擎和会话工厂（连接池是唯一的共享状态）
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(settings: "Settings") -> AsyncEngine:
    """根据配置创建异步引擎

    SQLite（测试用）不支持连接池大小参数。
    hide_parameters: SQL 参数不出现在日志和异常信息中。
    """
    kwargs: dict[str, Any] = {
        "echo": settings.database_echo,
        "hide_parameters": True,
        "connect_args": build_connect_args(settings),
    }
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
        )
    return create_async_engine(settings.database_url, **kwargs)


def requires_ssl(settings: "Settings") -> bool:
    """是否对 PostgreSQL 连接启用 SSL

    DATABASE_SSL 显式设置时以其为准；否则生产环境或托管数据库主机启用。
    """
    if settings.database_ssl is not None:
        return settings.database_ssl
    host = make_url(settings.database_url).host or ""
    return settings.is_production or any(
        host == remote or host.endswith(f".{remote}") for remote in REMOTE_DATABASE_HOSTS
    )


def build_connect_args(settings: "Settings") -> dict[str, Any]:
    """驱动连接参数（asyncpg 的 ssl="require" 加密连接但不校验证书）"""
    if make_url(settings.database_url).get_backend_name() != "postgresql":
        return {}
    return {"ssl": "require"} if requires_ssl(settings) else {}


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """创建会话工厂"""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(settings: "Settings") -> None:
    """初始化数据库连接"""
    global _engine, _session_factory

    _engine = build_engine(settings)
    _session_factory = build_session_factory(_engine)
    logger.info("Database engine initialized (%s)", _engine.url.render_as_string(hide_password=True))


async def close_db() -> None:
    """关闭数据库连接"""
    global _engine, _session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


def get_engine() -> AsyncEngine:
    """获取数据库引擎"""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """获取会话工厂"""
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    获取数据库会话 (用于 FastAPI 依赖注入)

    - 异常时回滚
    - 正常结束时提交
    """
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            try:
                async with storage_guard("commit"):
                    await session.commit()
            except sa_exc.PendingRollbackError as e:
                await session.rollback()
                if e.__cause__ is not None:
                    raise e.__cause__ from None  # pylint: disable=raising-non-exception
                raise
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """创建所有表 (开发/测试，或 DATABASE_AUTO_CREATE=true)"""
    # 注册模型到 Base.metadata
    import domains.health.infrastructure.models  # noqa: F401
    import domains.identity.infrastructure.models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await enable_row_level_security(conn)


async def enable_row_level_security(conn: AsyncConnection) -> None:
    """为 PostgreSQL 表启用行级安全

    不创建策略：表所有者（应用连接使用的角色）不受影响，其他角色无法读写。
    """
    if conn.dialect.name != "postgresql":
        return
    for table in ROW_LEVEL_SECURITY_TABLES:
        await conn.execute(text(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY"))
    logger.info("Row level security enabled: %s", ", ".join(ROW_LEVEL_SECURITY_TABLES))


async def drop_tables(engine: AsyncEngine | None = None) -> None:
    """删除所有表 (仅用于测试)"""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
