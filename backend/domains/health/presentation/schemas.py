"""
Health Presentation Schemas - 健康档案请求模式

档案和症状日志都是前端维护的文档，这里只校验外层结构。
"""

from typing import Any

from pydantic import BaseModel, Field


class ProfileRequest(BaseModel):
    """保存健康档案请求"""

    profile: dict[str, Any] = Field(..., description="健康档案（condition、triggerFoods 等）")


class SymptomRequest(BaseModel):
    """新增症状日志请求"""

    symptom: dict[str, Any] = Field(..., description="症状日志（timestamp、eatenFoods 等）")
