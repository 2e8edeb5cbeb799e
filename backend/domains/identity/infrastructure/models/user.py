"""
User Model - 用户模型

email 即身份标识，作为主键保证唯一。
"""

from typing import Any

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from domains.identity.domain.types import UserRecord
from libs.db.database import Base
from libs.orm.base import JSONDocument, TimestampMixin


class User(TimestampMixin, Base):
    """用户模型"""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(Text, primary_key=True)
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile: Mapped[dict[str, Any] | None] = mapped_column(
        "user_profile",
        JSONDocument,
        nullable=True,
    )
    encrypted_api_key: Mapped[str | None] = mapped_column(
        "encrypted_gemini_key",
        Text,
        nullable=True,
    )

    def to_record(self) -> UserRecord:
        """转换为不可变领域记录"""
        return UserRecord(
            email=self.email,
            password_hash=self.password_hash,
            profile=self.profile,
            encrypted_api_key=self.encrypted_api_key,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
