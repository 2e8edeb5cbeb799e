"""
API Dependencies - 共享 API 依赖注入

提供跨领域共享的 FastAPI 依赖：
- 数据库会话
- 服务工厂

配置和无状态服务在 create_app 中创建一次，保存在 app.state 上。
身份认证相关依赖请使用：domains.identity.presentation.deps
"""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated

from fastapi import Depends, Request
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession

from domains.assistant.application import AssistantUseCase
from domains.health.application import HealthUseCase
from domains.health.infrastructure.repositories import SQLAlchemySymptomRepository
from domains.identity.application import UserSecretManager
from domains.identity.domain.services import PasswordService, SecretCipher, TokenService
from domains.identity.infrastructure.repositories import SQLAlchemyUserRepository
from libs.db.database import get_session
from libs.llm import AIClient

__all__ = [
    "DbSession",
    "get_assistant_service",
    "get_db",
    "get_health_service",
    "get_token_service",
    "get_user_secret_manager",
]


# =============================================================================
# 数据库会话依赖
# =============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话"""
    async for session in get_session():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]


# =============================================================================
# 服务依赖
# =============================================================================


def get_token_service(request: Request) -> TokenService:
    """获取 Token 服务"""
    return request.app.state.token_service


def get_password_service(request: Request) -> PasswordService:
    """获取密码服务"""
    return request.app.state.password_service


def get_cipher(request: Request) -> SecretCipher:
    """获取密钥加解密器"""
    return request.app.state.cipher


def get_ai_client_factory(request: Request) -> Callable[[SecretStr], AIClient]:
    """获取按用户 Key 创建 AI 客户端的工厂"""
    return request.app.state.ai_client_factory


async def get_user_secret_manager(
    db: DbSession,
    password_service: Annotated[PasswordService, Depends(get_password_service)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    cipher: Annotated[SecretCipher, Depends(get_cipher)],
    client_factory: Annotated[Callable[[SecretStr], AIClient], Depends(get_ai_client_factory)],
) -> UserSecretManager:
    """获取用户凭证服务"""
    return UserSecretManager(
        user_repo=SQLAlchemyUserRepository(db),
        password_service=password_service,
        token_service=token_service,
        cipher=cipher,
        client_factory=client_factory,
    )


async def get_health_service(db: DbSession) -> HealthUseCase:
    """获取健康档案服务"""
    return HealthUseCase(
        user_repo=SQLAlchemyUserRepository(db),
        symptom_repo=SQLAlchemySymptomRepository(db),
    )


async def get_assistant_service(
    manager: Annotated[UserSecretManager, Depends(get_user_secret_manager)],
) -> AssistantUseCase:
    """获取 AI 助手服务"""
    return AssistantUseCase(manager)
