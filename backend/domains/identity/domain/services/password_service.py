"""
Password Domain Service - 密码领域服务

使用 bcrypt 进行密码哈希和验证
"""

import bcrypt

from exceptions import ValidationError
from libs.config import AuthConfig

# bcrypt 只使用前 72 字节，超长密码直接拒绝而不是静默截断
BCRYPT_MAX_BYTES = 72

PLACEHOLDER_PASSWORD = "gutcare-placeholder-password"


class PasswordService:
    """密码领域服务

    hash() 是 CPU 密集操作，异步调用方应通过 asyncio.to_thread 执行。
    """

    def __init__(self, config: AuthConfig) -> None:
        self._rounds = config.bcrypt_rounds
        self._placeholder_digest = self.hash(PLACEHOLDER_PASSWORD)

    def hash(self, password: str) -> str:
        """
        哈希密码

        Args:
            password: 明文密码

        Returns:
            bcrypt 摘要（每次调用盐值不同）

        Raises:
            ValidationError: 密码为空或超过 72 字节
        """
        encoded = self._encode(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """
        验证密码

        Args:
            password: 明文密码
            hashed: bcrypt 摘要

        Returns:
            密码是否匹配，摘要格式错误时返回 False
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except ValueError:
            return False

    def verify_placeholder(self, password: str) -> bool:
        """
        对固定摘要执行一次完整验证，始终返回 False

        用于账号不存在或没有密码的登录请求，耗时与一次真实验证相同。
        """
        self.verify(password, self._placeholder_digest)
        return False

    @staticmethod
    def _encode(password: str) -> bytes:
        if not password:
            raise ValidationError("Password is required")
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return encoded
