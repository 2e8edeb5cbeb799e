"""
Base Model - 模型基类

包含:
- TimestampMixin: 时间戳混入类
- JSONDocument: 跨方言 JSON 列类型（PostgreSQL 使用 JSONB）
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

JSONDocument = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")


class TimestampMixin:
    """时间戳混入类

    default 在 Python 侧填充，server_default 作为数据库侧后备。
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )
