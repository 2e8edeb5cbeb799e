"""
并发注册集成测试

使用文件数据库，每个请求持有独立连接，重复检测只能依赖主键约束。
"""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

from httpx import AsyncClient
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from bootstrap.config import Settings
from libs.db.database import build_session_factory, create_tables
from tests.conftest import TEST_EMAIL, TEST_PASSWORD, build_client
from tests.mocks.ai_mock import FakeAIClientFactory


@pytest_asyncio.fixture
async def file_client(tmp_path: Path, settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """文件数据库上的 HTTP 客户端"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gutcare.db'}")
    await create_tables(engine)
    async with build_client(settings, build_session_factory(engine), FakeAIClientFactory()) as ac:
        yield ac
    await engine.dispose()


@pytest.mark.integration
class TestConcurrentRegister:
    """并发注册测试"""

    @pytest.mark.asyncio
    async def test_same_identity_registers_once(self, file_client: AsyncClient):
        """测试: 同一邮箱并发注册，恰好一个成功、一个冲突"""
        # Arrange
        body = {"email": TEST_EMAIL, "password": TEST_PASSWORD}

        # Act
        responses = await asyncio.gather(
            file_client.post("/api/register", json=body),
            file_client.post("/api/register", json={**body, "password": "another password"}),
        )

        # Assert
        assert sorted(r.status_code for r in responses) == [201, 409]

    @pytest.mark.asyncio
    async def test_winner_password_is_kept(self, file_client: AsyncClient):
        """测试: 冲突的一方不会覆盖成功一方的密码"""
        passwords = [TEST_PASSWORD, "another password"]

        responses = await asyncio.gather(
            *(
                file_client.post("/api/register", json={"email": TEST_EMAIL, "password": pw})
                for pw in passwords
            )
        )
        winner = passwords[[r.status_code for r in responses].index(201)]
        loser = passwords[1 - passwords.index(winner)]

        ok = await file_client.post("/api/login", json={"email": TEST_EMAIL, "password": winner})
        denied = await file_client.post("/api/login", json={"email": TEST_EMAIL, "password": loser})

        assert ok.status_code == 200
        assert denied.status_code == 401
