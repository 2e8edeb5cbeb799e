"""Health Presentation Layer - 健康档案表示层"""

from domains.health.presentation.router import router

__all__ = ["router"]
