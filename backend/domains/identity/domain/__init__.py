"""
Identity Domain - 身份识别领域

包含用户记录类型、仓储接口和凭证相关的领域服务
"""

from domains.identity.domain.types import AuthResult, CurrentUser, UserRecord

__all__ = [
    "AuthResult",
    "CurrentUser",
    "UserRecord",
]
