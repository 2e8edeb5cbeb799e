"""
Identity API - 用户认证接口
"""

from fastapi import APIRouter, Depends, status

from domains.health.application import HealthUseCase
from domains.identity.application import UserSecretManager
from domains.identity.presentation.deps import AuthUser
from domains.identity.presentation.schemas import (
    ApiKeyRequest,
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    RegisterRequest,
)
from libs.api.deps import get_health_service, get_user_secret_manager

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    manager: UserSecretManager = Depends(get_user_secret_manager),
) -> MessageResponse:
    """注册用户（不签发 Token，需要再调用 /login）"""
    await manager.register(str(data.email), data.password)
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    manager: UserSecretManager = Depends(get_user_secret_manager),
    health: HealthUseCase = Depends(get_health_service),
) -> LoginResponse:
    """登录，返回 Token、用户信息和症状日志"""
    result = await manager.authenticate(str(data.email), data.password)
    symptoms = await health.list_symptoms(result.identity)
    return LoginResponse(
        token=result.token,
        user=LoginUser(
            email=result.identity,
            profile=result.profile,
            has_api_key=result.has_api_key,
        ),
        symptoms=symptoms,
    )


@router.post("/api-key")
async def save_api_key(
    data: ApiKeyRequest,
    current_user: AuthUser,
    manager: UserSecretManager = Depends(get_user_secret_manager),
) -> MessageResponse:
    """加密保存用户的 Gemini API Key"""
    await manager.set_api_key(current_user.identity, data.api_key)
    return MessageResponse(message="API key saved successfully")
