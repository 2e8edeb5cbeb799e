"""
User Repository Interface - 用户仓储接口

定义用户数据访问的抽象接口。
所有方法在数据库连接丢失时抛出 StorageUnavailableError。
"""

from abc import ABC, abstractmethod
from typing import Any

from domains.identity.domain.types import UserRecord


class UserRepository(ABC):
    """用户仓储接口"""

    @abstractmethod
    async def find_user_by_identity(self, email: str) -> UserRecord | None:
        """通过邮箱获取用户"""
        ...

    @abstractmethod
    async def insert_user(
        self,
        email: str,
        password_hash: str | None,
        profile: dict[str, Any] | None = None,
    ) -> UserRecord:
        """创建用户

        唯一性由主键约束保证。

        Raises:
            ConflictError: 邮箱已存在
        """
        ...

    @abstractmethod
    async def claim_legacy_user(self, email: str, password_hash: str) -> bool:
        """为没有密码的历史记录设置密码（单条条件 UPDATE）

        Returns:
            是否有记录被更新
        """
        ...

    @abstractmethod
    async def update_profile(self, email: str, profile: dict[str, Any]) -> UserRecord | None:
        """更新健康档案，用户不存在时返回 None"""
        ...

    @abstractmethod
    async def update_encrypted_key(self, email: str, blob: str) -> bool:
        """覆盖加密后的 API Key

        Returns:
            是否有记录被更新
        """
        ...
