"""Health Domain - Repository Implementations"""

from domains.health.infrastructure.repositories.sqlalchemy_symptom_repository import (
    SQLAlchemySymptomRepository,
)

__all__ = ["SQLAlchemySymptomRepository"]
