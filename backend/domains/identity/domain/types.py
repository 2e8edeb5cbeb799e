"""
Identity Domain Types - 身份域类型定义

包含身份认证相关的核心类型：
- UserRecord: 仓储返回的不可变用户记录
- CurrentUser: 通过授权门的请求身份
- AuthResult: 登录结果
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class UserRecord:
    """用户记录

    password_hash、profile、encrypted_api_key 都可能缺失，
    使用前必须检查（has_password / has_api_key 或 match）。
    历史自动注册流程留下的记录没有 password_hash。
    """

    email: str
    password_hash: str | None = None
    profile: dict[str, Any] | None = None
    encrypted_api_key: str | None = None
    created_at: datetime | None = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    @property
    def has_api_key(self) -> bool:
        return bool(self.encrypted_api_key)


@dataclass(frozen=True, slots=True)
class CurrentUser:
    """已认证的请求身份（来自 Token 的 sub）"""

    identity: str


@dataclass(frozen=True, slots=True)
class AuthResult:
    """登录结果

    不包含密文或明文 API Key，只暴露是否已配置。
    """

    token: str
    identity: str
    profile: dict[str, Any] | None
    has_api_key: bool
