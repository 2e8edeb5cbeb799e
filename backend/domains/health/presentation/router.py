"""
Health API - 健康档案接口
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from domains.health.application import HealthUseCase
from domains.health.presentation.schemas import ProfileRequest, SymptomRequest
from domains.identity.presentation.deps import AuthUser
from libs.api.deps import get_health_service

router = APIRouter()


@router.post("/profile")
async def save_profile(
    data: ProfileRequest,
    current_user: AuthUser,
    service: HealthUseCase = Depends(get_health_service),
) -> dict[str, Any]:
    """保存健康档案，返回存储后的档案"""
    return await service.update_profile(current_user.identity, data.profile)


@router.get("/symptoms")
async def list_symptoms(
    current_user: AuthUser,
    service: HealthUseCase = Depends(get_health_service),
) -> list[dict[str, Any]]:
    """获取症状日志（按时间升序）"""
    return await service.list_symptoms(current_user.identity)


@router.post("/symptoms", status_code=status.HTTP_201_CREATED)
async def add_symptom(
    data: SymptomRequest,
    current_user: AuthUser,
    service: HealthUseCase = Depends(get_health_service),
) -> list[dict[str, Any]]:
    """新增症状日志，返回全部日志"""
    return await service.add_symptom(current_user.identity, data.symptom)
