"""Health Domain - Application Layer"""

from domains.health.application.health_use_case import HealthUseCase

__all__ = ["HealthUseCase"]
