"""
Identity Presentation Schemas - 身份认证表示层模式

包含注册、登录、API Key 的请求响应模式。
JSON 字段沿用前端的 camelCase 命名（通过 alias）。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# =============================================================================
# 请求模式
# =============================================================================


class RegisterRequest(BaseModel):
    """用户注册请求"""

    email: EmailStr = Field(..., description="邮箱地址")
    password: str = Field(..., min_length=1, description="密码（最多 72 字节）")


class LoginRequest(BaseModel):
    """用户登录请求"""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ApiKeyRequest(BaseModel):
    """设置 Gemini API Key 请求"""

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="apiKey", min_length=1, description="Gemini API Key")


# =============================================================================
# 响应模式
# =============================================================================


class MessageResponse(BaseModel):
    """通用消息响应"""

    message: str


class LoginUser(BaseModel):
    """登录响应中的用户信息（不含任何 Key 材料）"""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    profile: dict[str, Any] | None = None
    has_api_key: bool = Field(..., alias="hasApiKey")


class LoginResponse(BaseModel):
    """登录响应"""

    token: str
    user: LoginUser
    symptoms: list[dict[str, Any]] = Field(default_factory=list)
