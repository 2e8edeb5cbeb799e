"""
AI 助手 API 集成测试

AI 客户端由 FakeAIClientFactory 提供，不访问网络。
"""

import json

from httpx import AsyncClient
import pytest
import pytest_asyncio
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domains.assistant.domain.prompts import NOT_ENOUGH_DATA_MESSAGE
from domains.assistant.domain.schemas import CUSTOM_RECIPE_CATEGORY
from domains.identity.infrastructure.models import User
from exceptions import ExternalServiceError
from tests.conftest import TEST_EMAIL
from tests.mocks.ai_mock import FakeAIClientFactory

API_KEY = "AIzaSy-assistant-api-key"
PROFILE = {"condition": "GERD", "triggerFoods": ["coffee"]}
LOGS = [{"id": str(i), "eatenFoods": "cơm", "painLevel": i} for i in range(3)]


@pytest_asyncio.fixture
async def key_headers(client: AsyncClient, auth_headers: dict[str, str]) -> dict[str, str]:
    """已保存 API Key 的用户认证头"""
    response = await client.post("/api/api-key", json={"apiKey": API_KEY}, headers=auth_headers)
    assert response.status_code == 200
    return auth_headers


@pytest.mark.integration
class TestWithoutKey:
    """未配置 Key 的情况"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path,body",
        [
            ("/api/gemini/meal-plan", {"profile": PROFILE, "symptoms": []}),
            ("/api/gemini/check-food", {"profile": PROFILE, "foodName": "cà phê"}),
            ("/api/gemini/analyze-triggers", {"profile": PROFILE, "symptoms": LOGS}),
            ("/api/gemini/suggest-recipe", {"profile": PROFILE, "request": "súp"}),
        ],
    )
    async def test_no_api_key(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        ai_factory: FakeAIClientFactory,
        path: str,
        body: dict,
    ):
        """测试: 未配置 Key 返回 400 NO_API_KEY，不调用模型"""
        response = await client.post(path, json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "NO_API_KEY"
        assert ai_factory.clients == []

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/gemini/meal-plan", json={"profile": PROFILE})

        assert response.status_code == 401


@pytest.mark.integration
class TestAssistantAPI:
    """AI 代理接口测试"""

    @pytest.mark.asyncio
    async def test_meal_plan(
        self, client: AsyncClient, key_headers: dict[str, str], ai_factory: FakeAIClientFactory
    ):
        """测试: 使用用户自己的 Key 调用模型"""
        ai_factory.response = json.dumps(
            [{"day": "Ngày 1", "meals": [{"name": "Cháo", "time": "7:00", "portion": "1 bát", "note": "Nhẹ"}]}]
        )

        response = await client.post(
            "/api/gemini/meal-plan", json={"profile": PROFILE, "symptoms": LOGS}, headers=key_headers
        )

        assert response.status_code == 200
        assert response.json()[0]["meals"][0]["name"] == "Cháo"
        assert ai_factory.clients[0].api_key.get_secret_value() == API_KEY

    @pytest.mark.asyncio
    async def test_check_food_with_image(
        self, client: AsyncClient, key_headers: dict[str, str], ai_factory: FakeAIClientFactory
    ):
        ai_factory.response = json.dumps({"safetyLevel": "Hạn chế", "reason": "Có caffeine"})

        response = await client.post(
            "/api/gemini/check-food",
            json={
                "profile": PROFILE,
                "foodName": "cà phê",
                "foodImage": {"mimeType": "image/jpeg", "data": "Zm9v"},
            },
            headers=key_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"safetyLevel": "Hạn chế", "reason": "Có caffeine"}
        assert ai_factory.calls[0].image.as_data_uri() == "data:image/jpeg;base64,Zm9v"

    @pytest.mark.asyncio
    async def test_check_food_rejects_non_image(self, client: AsyncClient, key_headers: dict[str, str]):
        response = await client.post(
            "/api/gemini/check-food",
            json={"foodName": "x", "foodImage": {"mimeType": "text/html", "data": "Zm9v"}},
            headers=key_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_analyze_triggers_not_enough_data(
        self, client: AsyncClient, auth_headers: dict[str, str], ai_factory: FakeAIClientFactory
    ):
        """测试: 日志不足时直接返回提示"""
        response = await client.post(
            "/api/gemini/analyze-triggers",
            json={"profile": PROFILE, "symptoms": LOGS[:2]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"analysis": NOT_ENOUGH_DATA_MESSAGE}
        assert ai_factory.clients == []

    @pytest.mark.asyncio
    async def test_analyze_triggers(
        self, client: AsyncClient, key_headers: dict[str, str], ai_factory: FakeAIClientFactory
    ):
        ai_factory.response = "**NÊN TRÁNH**"

        response = await client.post(
            "/api/gemini/analyze-triggers",
            json={"profile": PROFILE, "symptoms": LOGS},
            headers=key_headers,
        )

        assert response.json() == {"analysis": "**NÊN TRÁNH**"}

    @pytest.mark.asyncio
    async def test_suggest_recipe(
        self, client: AsyncClient, key_headers: dict[str, str], ai_factory: FakeAIClientFactory
    ):
        ai_factory.response = json.dumps(
            {
                "title": "Súp",
                "description": "Nhẹ",
                "cookTime": "20 phút",
                "ingredients": ["bí"],
                "instructions": "Nấu",
            }
        )

        response = await client.post(
            "/api/gemini/suggest-recipe",
            json={"profile": PROFILE, "request": "súp"},
            headers=key_headers,
        )

        assert response.status_code == 200
        assert response.json()["category"] == CUSTOM_RECIPE_CATEGORY

    @pytest.mark.asyncio
    async def test_upstream_failure(
        self, client: AsyncClient, key_headers: dict[str, str], ai_factory: FakeAIClientFactory
    ):
        """测试: 上游失败返回 502"""
        ai_factory.error = ExternalServiceError("gemini", "AI service request failed. Check your API key.")

        response = await client.post(
            "/api/gemini/suggest-recipe",
            json={"profile": PROFILE, "request": "súp"},
            headers=key_headers,
        )

        assert response.status_code == 502
        assert API_KEY not in response.text

    @pytest.mark.asyncio
    async def test_unparsable_model_output(self, client: AsyncClient, key_headers: dict[str, str]):
        """测试: 模型输出不符合结构时返回 502"""
        response = await client.post(
            "/api/gemini/meal-plan", json={"profile": PROFILE}, headers=key_headers
        )

        assert response.status_code == 502

    @pytest.mark.asyncio
    async def test_corrupted_blob(
        self,
        client: AsyncClient,
        key_headers: dict[str, str],
        session_factory: async_sessionmaker[AsyncSession],
        ai_factory: FakeAIClientFactory,
    ):
        """测试: 存储的密文损坏时返回 500 并提示重新输入"""
        async with session_factory() as session:
            await session.execute(
                update(User)
                .where(User.email == TEST_EMAIL)
                .values({User.encrypted_api_key: "00" * 16 + ":" + "ab" * 48})
            )
            await session.commit()

        response = await client.post(
            "/api/gemini/suggest-recipe",
            json={"profile": PROFILE, "request": "súp"},
            headers=key_headers,
        )

        assert response.status_code == 500
        assert response.json()["code"] == "DECRYPTION_ERROR"
        assert ai_factory.clients == []
