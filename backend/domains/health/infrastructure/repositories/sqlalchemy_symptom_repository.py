"""
SQLAlchemy Symptom Repository - 症状日志仓储实现
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domains.health.domain.repositories import SymptomRepository
from domains.health.infrastructure.models.symptom import Symptom
from exceptions import ConflictError
from libs.db import storage_guard


class SQLAlchemySymptomRepository(SymptomRepository):
    """SQLAlchemy 症状日志仓储实现"""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, email: str, symptom_id: str, log_data: dict[str, Any]) -> None:
        """写入一条症状日志"""
        self.db.add(Symptom(id=symptom_id, user_email=email, log_data=log_data))
        async with storage_guard("insert_symptom", email):
            try:
                await self.db.flush()
            except IntegrityError:
                await self.db.rollback()
                raise ConflictError("Symptom log already exists", resource="symptom") from None

    async def list_for_user(self, email: str) -> list[dict[str, Any]]:
        """按创建时间升序返回用户的全部日志"""
        stmt = (
            select(Symptom.log_data)
            .where(Symptom.user_email == email)
            .order_by(Symptom.created_at.asc())
        )
        async with storage_guard("list_symptoms", email):
            result = await self.db.execute(stmt)
        return list(result.scalars().all())
