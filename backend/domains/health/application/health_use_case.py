"""
Health Use Case - 健康档案用例

档案与症状日志的读写，所有操作都以授权门给出的身份为范围。
"""

from typing import Any
import uuid

from domains.health.domain.repositories import SymptomRepository
from domains.identity.domain.repositories.user_repository import UserRepository
from exceptions import NotFoundError
from utils.logging import get_logger

logger = get_logger(__name__)


class HealthUseCase:
    """健康档案用例"""

    def __init__(self, user_repo: UserRepository, symptom_repo: SymptomRepository) -> None:
        self.user_repo = user_repo
        self.symptom_repo = symptom_repo

    async def update_profile(self, email: str, profile: dict[str, Any]) -> dict[str, Any]:
        """保存健康档案并返回存储后的内容

        Raises:
            NotFoundError: 用户不存在
        """
        user = await self.user_repo.update_profile(email, profile)
        if user is None:
            raise NotFoundError("User", email)
        logger.info("Profile updated for %s", email)
        return user.profile or {}

    async def add_symptom(self, email: str, symptom: dict[str, Any]) -> list[dict[str, Any]]:
        """追加一条症状日志，返回用户的全部日志

        日志 ID 取自 symptom["id"]，缺失时由服务端生成。

        Raises:
            NotFoundError: 用户不存在
            ConflictError: 该用户下日志 ID 重复
        """
        if await self.user_repo.find_user_by_identity(email) is None:
            raise NotFoundError("User", email)

        symptom_id = str(symptom.get("id") or uuid.uuid4())
        log_data = {**symptom, "id": symptom_id}
        await self.symptom_repo.insert(email, symptom_id, log_data)
        logger.info("Symptom %s recorded for %s", symptom_id, email)
        return await self.symptom_repo.list_for_user(email)

    async def list_symptoms(self, email: str) -> list[dict[str, Any]]:
        """按时间顺序返回用户的全部日志"""
        return await self.symptom_repo.list_for_user(email)
