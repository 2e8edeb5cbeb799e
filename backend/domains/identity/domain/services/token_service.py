"""
Token Domain Service - Token 领域服务

HS256 JWT 会话令牌的签发与验证。令牌不在服务端存储，
只能通过过期或更换签名密钥失效。
"""

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel

from libs.config import AuthConfig
from utils.logging import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


class TokenPayload(BaseModel):
    """Token 载荷"""

    sub: str  # 用户标识（邮箱）
    exp: datetime  # 过期时间
    iat: datetime  # 签发时间
    type: str = ACCESS_TOKEN_TYPE


class TokenService:
    """Token 领域服务

    验证结果只取决于 (token, 签名密钥, now)，now 可注入以便测试。
    """

    def __init__(self, config: AuthConfig) -> None:
        self._secret = config.jwt_secret
        self._algorithm = config.jwt_algorithm
        self._ttl = timedelta(days=config.token_ttl_days)

    def issue(self, identity: str, now: datetime | None = None) -> str:
        """
        签发访问令牌

        Args:
            identity: 用户标识
            now: 签发时间，默认当前 UTC 时间

        Returns:
            JWT Token
        """
        issued_at = now or datetime.now(UTC)
        payload = {
            "sub": identity,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
            "type": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(payload, self._secret.get_secret_value(), algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> TokenPayload | None:
        """
        验证令牌

        过期与伪造都返回 None，只有日志级别不同。

        Args:
            token: JWT Token
            now: 验证时间，默认当前 UTC 时间

        Returns:
            Token 载荷，验证失败返回 None
        """
        try:
            payload = jwt.decode(
                token,
                self._secret.get_secret_value(),
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"], "verify_exp": False},
            )
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid token: %s", type(e).__name__)
            return None

        exp = datetime.fromtimestamp(payload["exp"], tz=UTC)
        if (now or datetime.now(UTC)) >= exp:
            logger.debug("Token expired")
            return None

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            logger.warning("Invalid token type: %s", payload.get("type"))
            return None

        return TokenPayload(
            sub=payload["sub"],
            exp=exp,
            iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
            type=payload["type"],
        )
