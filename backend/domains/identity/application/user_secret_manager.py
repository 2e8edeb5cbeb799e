"""
User Secret Manager - 用户凭证用例

编排注册、登录、API Key 存储，以及按用户创建 AI 客户端。

登录策略：严格的先注册后登录，不会在首次登录时自动创建用户。
"""

import asyncio
from collections.abc import Callable

from pydantic import SecretStr

from domains.identity.domain.repositories.user_repository import UserRepository
from domains.identity.domain.services.password_service import PasswordService
from domains.identity.domain.services.secret_cipher import SecretCipher
from domains.identity.domain.services.token_service import TokenService
from domains.identity.domain.types import AuthResult, UserRecord
from exceptions import (
    AuthenticationError,
    ConflictError,
    NoApiKeyConfiguredError,
    NotFoundError,
    ValidationError,
)
from libs.llm import AIClient
from utils.logging import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class UserSecretManager:
    """用户凭证用例

    所有协作者通过构造函数注入，不读取全局配置。
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordService,
        token_service: TokenService,
        cipher: SecretCipher,
        client_factory: Callable[[SecretStr], AIClient],
    ) -> None:
        self.user_repo = user_repo
        self.password_service = password_service
        self.token_service = token_service
        self.cipher = cipher
        self.client_factory = client_factory

    async def register(self, email: str, password: str) -> None:
        """注册用户

        先尝试认领没有密码的历史记录，否则插入新记录。
        重复检测依赖主键约束，不做先查后插。

        Raises:
            ValidationError: 密码为空或过长
            ConflictError: 邮箱已注册
        """
        password_hash = await asyncio.to_thread(self.password_service.hash, password)

        if await self.user_repo.claim_legacy_user(email, password_hash):
            logger.info("Legacy user claimed: %s", email)
            return

        try:
            await self.user_repo.insert_user(email, password_hash)
        except ConflictError:
            logger.info("Registration conflict: %s", email)
            raise
        logger.info("User registered: %s", email)

    async def authenticate(self, email: str, password: str) -> AuthResult:
        """用户认证

        用户不存在、没有密码或密码错误都返回同一条消息。

        Raises:
            AuthenticationError: 认证失败
        """
        user = await self.user_repo.find_user_by_identity(email)

        match user:
            case UserRecord(password_hash=str(digest)) if user.has_password:
                matched = await asyncio.to_thread(self.password_service.verify, password, digest)
            case _:
                # 无记录或无密码时同样执行一次 bcrypt，响应时间不区分两种失败
                matched = await asyncio.to_thread(
                    self.password_service.verify_placeholder, password
                )

        if not matched or user is None:
            logger.info("Authentication failed: %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self.token_service.issue(user.email)
        logger.info("User authenticated: %s", email)
        return AuthResult(
            token=token,
            identity=user.email,
            profile=user.profile,
            has_api_key=user.has_api_key,
        )

    async def set_api_key(self, email: str, api_key: str) -> None:
        """加密并覆盖用户的 API Key

        Raises:
            ValidationError: Key 为空
            NotFoundError: 用户不存在
        """
        if not api_key or not api_key.strip():
            raise ValidationError("API key is required")

        blob = self.cipher.encrypt(api_key)
        if not await self.user_repo.update_encrypted_key(email, blob):
            raise NotFoundError("User", email)
        logger.info("API key updated for %s", email)

    async def get_ai_client_for(self, email: str) -> AIClient:
        """为用户创建绑定其 API Key 的 AI 客户端

        Raises:
            NoApiKeyConfiguredError: 用户不存在或未设置 Key
            DecryptionError: 存储的密文不可用
        """
        user = await self.user_repo.find_user_by_identity(email)

        match user:
            case UserRecord(encrypted_api_key=str(blob)) if blob:
                api_key = SecretStr(self.cipher.decrypt(blob))
            case _:
                raise NoApiKeyConfiguredError()

        return self.client_factory(api_key)
