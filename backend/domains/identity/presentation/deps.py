"""
Identity Presentation Dependencies - 身份认证依赖注入

授权门：从 ``Authorization: Bearer <token>`` 提取并验证会话令牌。

- 缺少请求头或不是 Bearer 凭证：AuthenticationError (401)
- 令牌无效或已过期：TokenError (403)
- 验证通过：返回 CurrentUser，并写入 request.state.current_user

授权门只验证令牌，不访问数据库。
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from domains.identity.domain.services import TokenService
from domains.identity.domain.types import CurrentUser
from exceptions import AuthenticationError, TokenError
from libs.api.deps import get_token_service

__all__ = [
    "AuthUser",
    "get_current_user",
]

security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    token_service: Annotated[TokenService, Depends(get_token_service)],
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    """获取当前用户"""
    if credentials is None:
        raise AuthenticationError("Authentication required")

    payload = token_service.verify(credentials.credentials)
    if payload is None:
        raise TokenError()

    current_user = CurrentUser(identity=payload.sub)
    request.state.current_user = current_user
    return current_user


# 类型别名
AuthUser = Annotated[CurrentUser, Depends(get_current_user)]
