"""
Symptom Repository Interface - 症状日志仓储接口
"""

from abc import ABC, abstractmethod
from typing import Any


class SymptomRepository(ABC):
    """症状日志仓储接口"""

    @abstractmethod
    async def insert(self, email: str, symptom_id: str, log_data: dict[str, Any]) -> None:
        """写入一条症状日志

        Raises:
            ConflictError: 该用户下日志 ID 已存在
        """
        ...

    @abstractmethod
    async def list_for_user(self, email: str) -> list[dict[str, Any]]:
        """按创建时间升序返回用户的全部日志"""
        ...
