"""API - 共享 API 组件

跨领域共享的 API 组件：
- deps: 数据库会话和服务工厂依赖

身份认证相关依赖请使用：domains.identity.presentation.deps
"""

from libs.api.deps import (
    DbSession,
    get_assistant_service,
    get_db,
    get_health_service,
    get_token_service,
    get_user_secret_manager,
)

__all__ = [
    "DbSession",
    "get_assistant_service",
    "get_db",
    "get_health_service",
    "get_token_service",
    "get_user_secret_manager",
]
