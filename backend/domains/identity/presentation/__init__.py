"""Identity Presentation Layer - 身份认证表示层

提供身份认证相关的 API 组件：
- deps: 授权门依赖（AuthUser, get_current_user）
- schemas: 请求/响应模型
- router: API 路由
"""

from domains.identity.presentation.deps import AuthUser, get_current_user
from domains.identity.presentation.router import router

__all__ = [
    "AuthUser",
    "get_current_user",
    "router",
]
