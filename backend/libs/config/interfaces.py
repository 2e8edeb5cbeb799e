"""
Configuration Interfaces - 配置接口

领域服务只依赖这里的 Protocol，不依赖 bootstrap.config.Settings，
单元测试可以传入任意满足接口的对象（合成密钥）。
"""

from typing import Protocol

from pydantic import SecretStr


class AuthConfig(Protocol):
    """认证配置接口"""

    jwt_secret: SecretStr
    jwt_algorithm: str
    token_ttl_days: int
    bcrypt_rounds: int


class CipherConfig(Protocol):
    """加密配置接口"""

    @property
    def encryption_key_bytes(self) -> bytes: ...


class AIConfig(Protocol):
    """AI 代理配置接口"""

    ai_model: str
