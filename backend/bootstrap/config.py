"""
Application Configuration Management

配置优先级（从高到低）：
1. 环境变量（最高优先级）
2. .env 文件
3. 代码中的默认值

JWT_SECRET、ENCRYPTION_KEY、DATABASE_URL 没有默认值，缺失时启动失败。
配置对象在应用工厂中创建一次，通过依赖注入传给各服务。
"""

from typing import Literal

from pydantic import Field, SecretStr, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from exceptions import ConfigurationError
from utils.logging import get_logger

logger = get_logger(__name__)

ENCRYPTION_KEY_BYTES = 32


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # 应用配置
    # ========================================================================
    app_name: str = "GutCare"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # ========================================================================
    # 服务器配置
    # ========================================================================
    host: str = "0.0.0.0"
    port: int = 5001

    # ========================================================================
    # 数据库配置
    # ========================================================================
    database_url: str
    database_pool_size: int = 10
    database_max_overflow: int = 5
    database_echo: bool = False
    database_auto_create: bool = True
    # None: 生产环境或托管数据库主机时自动启用
    database_ssl: bool | None = None

    # ========================================================================
    # 安全配置
    # ========================================================================
    jwt_secret: SecretStr
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = Field(default=7, ge=1)
    encryption_key: SecretStr
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # ========================================================================
    # AI 配置
    # ========================================================================
    ai_model: str = "gemini/gemini-2.5-flash"

    # ========================================================================
    # 日志配置
    # ========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("jwt_secret", "encryption_key")
    @classmethod
    def _not_blank(cls, v: SecretStr, info: ValidationInfo) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("encryption_key")
    @classmethod
    def _thirty_two_bytes(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value().encode("utf-8")) != ENCRYPTION_KEY_BYTES:
            raise ValueError(f"must be exactly {ENCRYPTION_KEY_BYTES} bytes")
        return v

    @model_validator(mode="after")
    def _distinct_keys(self) -> "Settings":
        if self.jwt_secret.get_secret_value() == self.encryption_key.get_secret_value():
            raise ValueError("JWT_SECRET and ENCRYPTION_KEY must differ")
        return self

    @property
    def encryption_key_bytes(self) -> bytes:
        """AES-256 密钥原始字节"""
        return self.encryption_key.get_secret_value().encode("utf-8")

    @property
    def is_development(self) -> bool:
        """是否为开发环境"""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """是否为生产环境"""
        return self.app_env == "production"


def load_settings(**overrides: object) -> Settings:
    """加载并校验配置

    pydantic 的错误信息会回显输入值，这里只保留字段名与原因，
    然后抛出 ConfigurationError。

    Raises:
        ConfigurationError: 必需配置缺失或格式错误
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except PydanticValidationError as e:
        fields: list[str] = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "settings"
            fields.append(field)
            logger.error("Invalid configuration for %s: %s", field, err["msg"])
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}", fields=fields
        ) from None
