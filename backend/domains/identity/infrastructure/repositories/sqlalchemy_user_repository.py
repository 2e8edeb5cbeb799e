"""
SQLAlchemy User Repository - 用户仓储实现

使用 SQLAlchemy 实现用户数据访问
"""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domains.identity.domain.repositories.user_repository import UserRepository
from domains.identity.domain.types import UserRecord
from domains.identity.infrastructure.models.user import User
from exceptions import ConflictError
from libs.db import storage_guard


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy 用户仓储实现"""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_user_by_identity(self, email: str) -> UserRecord | None:
        """通过邮箱获取用户"""
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        async with storage_guard("find_user_by_identity", email):
            result = await self.db.execute(stmt)
        user = result.scalar_one_or_none()
        return user.to_record() if user else None

    async def insert_user(
        self,
        email: str,
        password_hash: str | None,
        profile: dict[str, Any] | None = None,
    ) -> UserRecord:
        """创建用户"""
        user = User(email=email, password_hash=password_hash, profile=profile)
        self.db.add(user)
        async with storage_guard("insert_user", email):
            try:
                await self.db.flush()
            except IntegrityError:
                await self.db.rollback()
                raise ConflictError("Email already exists", resource="user") from None
        return user.to_record()

    async def claim_legacy_user(self, email: str, password_hash: str) -> bool:
        """为没有密码的历史记录设置密码"""
        stmt = (
            update(User)
            .where(User.email == email, User.password_hash.is_(None))
            .values({User.password_hash: password_hash})
            .execution_options(synchronize_session=False)
        )
        async with storage_guard("claim_legacy_user", email):
            result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def update_profile(self, email: str, profile: dict[str, Any]) -> UserRecord | None:
        """更新健康档案"""
        stmt = (
            update(User)
            .where(User.email == email)
            .values({User.profile: profile})
            .execution_options(synchronize_session=False)
        )
        async with storage_guard("update_profile", email):
            result = await self.db.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.find_user_by_identity(email)

    async def update_encrypted_key(self, email: str, blob: str) -> bool:
        """覆盖加密后的 API Key"""
        stmt = (
            update(User)
            .where(User.email == email)
            .values({User.encrypted_api_key: blob})
            .execution_options(synchronize_session=False)
        )
        async with storage_guard("update_encrypted_key", email):
            result = await self.db.execute(stmt)
        return result.rowcount > 0
