"""
Symptom Model - 症状日志模型

log_data 是前端提交的原始文档（timestamp、eatenFoods、painLevel 等）。
主键为 (user_email, id)：日志 ID 只在同一用户内唯一。
"""

from typing import Any

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from libs.db.database import Base
from libs.orm.base import JSONDocument, TimestampMixin


class Symptom(TimestampMixin, Base):
    """症状日志模型"""

    __tablename__ = "symptoms"

    user_email: Mapped[str] = mapped_column(
        Text,
        ForeignKey("users.email", ondelete="CASCADE"),
        primary_key=True,
    )
    id: Mapped[str] = mapped_column(Text, primary_key=True)
    log_data: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)

    def __repr__(self) -> str:
        return f"<Symptom {self.id} user={self.user_email}>"
