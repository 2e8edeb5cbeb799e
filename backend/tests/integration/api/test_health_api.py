"""
健康档案 API 集成测试
"""

from httpx import AsyncClient
import pytest

from tests.conftest import TEST_EMAIL, TEST_PASSWORD, register_and_login

PROFILE = {"condition": "GERD", "painLevel": 4, "triggerFoods": ["coffee"], "dietaryGoal": "heal"}


@pytest.mark.integration
class TestProfileAPI:
    """档案接口测试"""

    @pytest.mark.asyncio
    async def test_save_profile(self, client: AsyncClient, auth_headers: dict[str, str]):
        """测试: 保存后登录可以读到档案"""
        response = await client.post("/api/profile", json={"profile": PROFILE}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == PROFILE

        login = await client.post(
            "/api/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD}
        )
        assert login.json()["user"]["profile"] == PROFILE

    @pytest.mark.asyncio
    async def test_profile_overwrites(self, client: AsyncClient, auth_headers: dict[str, str]):
        await client.post("/api/profile", json={"profile": PROFILE}, headers=auth_headers)

        response = await client.post(
            "/api/profile", json={"profile": {"condition": "IBS"}}, headers=auth_headers
        )

        assert response.json() == {"condition": "IBS"}

    @pytest.mark.asyncio
    async def test_profile_requires_object(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.post("/api/profile", json={"profile": "GERD"}, headers=auth_headers)

        assert response.status_code == 400


@pytest.mark.integration
class TestSymptomAPI:
    """症状日志接口测试"""

    @pytest.mark.asyncio
    async def test_add_and_list(self, client: AsyncClient, auth_headers: dict[str, str]):
        """测试: 新增返回全部日志，按写入顺序"""
        first = {"id": "s1", "timestamp": 1709627400000, "eatenFoods": "phở", "painLevel": 3}
        second = {"id": "s2", "eatenFoods": "cháo", "painLevel": 0}

        await client.post("/api/symptoms", json={"symptom": first}, headers=auth_headers)
        response = await client.post("/api/symptoms", json={"symptom": second}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json() == [first, second]

        listed = await client.get("/api/symptoms", headers=auth_headers)
        assert listed.json() == [first, second]

    @pytest.mark.asyncio
    async def test_server_generates_id(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.post(
            "/api/symptoms", json={"symptom": {"painLevel": 2}}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()[0]["id"]

    @pytest.mark.asyncio
    async def test_duplicate_id(self, client: AsyncClient, auth_headers: dict[str, str]):
        """测试: 重复日志 ID 返回 409，已有日志不受影响"""
        await client.post("/api/symptoms", json={"symptom": {"id": "s1"}}, headers=auth_headers)

        response = await client.post(
            "/api/symptoms", json={"symptom": {"id": "s1", "painLevel": 9}}, headers=auth_headers
        )

        assert response.status_code == 409
        listed = await client.get("/api/symptoms", headers=auth_headers)
        assert listed.json() == [{"id": "s1"}]

    @pytest.mark.asyncio
    async def test_symptoms_in_login_response(self, client: AsyncClient, auth_headers: dict[str, str]):
        await client.post("/api/symptoms", json={"symptom": {"id": "s1"}}, headers=auth_headers)

        login = await client.post(
            "/api/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD}
        )

        assert login.json()["symptoms"] == [{"id": "s1"}]

    @pytest.mark.asyncio
    async def test_same_id_for_different_users(self, client: AsyncClient, auth_headers: dict[str, str]):
        """测试: 日志 ID 只在同一用户内唯一，其他用户使用相同 ID 不冲突"""
        bob = await register_and_login(client, "bob@example.com", "bob-password")
        await client.post("/api/symptoms", json={"symptom": {"id": "s1"}}, headers=auth_headers)

        response = await client.post(
            "/api/symptoms", json={"symptom": {"id": "s1", "painLevel": 2}}, headers=bob
        )

        assert response.status_code == 201
        assert response.json() == [{"id": "s1", "painLevel": 2}]
        alice_logs = await client.get("/api/symptoms", headers=auth_headers)
        assert alice_logs.json() == [{"id": "s1"}]
