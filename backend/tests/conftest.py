"""
Pytest Configuration - 测试配置

提供测试所需的 fixtures：
- settings: 使用合成密钥的配置（不读取 .env）
- db_engine / db_session: 内存 SQLite（aiosqlite），代替 PostgreSQL
- client: 基于 create_app 的 HTTP 客户端，AI 客户端替换为 FakeAIClientFactory
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
import logging
import warnings

from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bootstrap.config import Settings
from bootstrap.main import create_app
from libs.api.deps import get_db
from libs.db.database import build_session_factory, create_tables, drop_tables
from tests.mocks.ai_mock import FakeAIClientFactory

warnings.filterwarnings("ignore", category=RuntimeWarning, module="litellm")
warnings.filterwarnings("ignore", category=UserWarning, module="pydantic")

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "jwt-secret-for-tests-only"
TEST_ENCRYPTION_KEY = "0123456789abcdef0123456789abcdef"  # 32 字节

TEST_EMAIL = "alice@example.com"
TEST_PASSWORD = "correct horse battery"


def make_settings(**overrides: object) -> Settings:
    """构建测试配置（不读取 .env 文件）"""
    values: dict[str, object] = {
        "database_url": TEST_DATABASE_URL,
        "jwt_secret": TEST_JWT_SECRET,
        "encryption_key": TEST_ENCRYPTION_KEY,
        "bcrypt_rounds": 4,
        "database_auto_create": False,
        "app_env": "production",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.fixture
def log_records(
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> pytest.LogCaptureFixture:
    """捕获 gutcare 日志树的全部记录（setup_logging 会关闭向根日志器传播）"""
    monkeypatch.setattr(logging.getLogger("gutcare"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="gutcare")
    return caplog


@pytest.fixture
def settings() -> Settings:
    """测试配置 fixture"""
    return make_settings()


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """内存数据库引擎（StaticPool 保证所有会话共享同一个连接）"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """会话工厂 fixture"""
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """数据库会话 fixture"""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def ai_factory() -> FakeAIClientFactory:
    """AI 客户端工厂替身，默认返回空 JSON 对象"""
    return FakeAIClientFactory()


@asynccontextmanager
async def build_client(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    ai_factory: FakeAIClientFactory,
) -> AsyncIterator[AsyncClient]:
    """基于 create_app 构建 HTTP 客户端

    ASGITransport 不触发 lifespan，数据库会话通过 get_db 覆盖注入，
    每个请求使用独立会话。
    """
    app = create_app(settings)
    app.state.ai_client_factory = ai_factory

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    ai_factory: FakeAIClientFactory,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP 客户端 fixture"""
    async with build_client(settings, session_factory, ai_factory) as ac:
        yield ac


async def register_and_login(
    client: AsyncClient,
    email: str = TEST_EMAIL,
    password: str = TEST_PASSWORD,
) -> dict[str, str]:
    """注册并登录，返回认证头"""
    response = await client.post("/api/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    response = await client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """已注册用户的认证头 fixture"""
    return await register_and_login(client)
