from domains.health.domain.repositories.symptom_repository import SymptomRepository

__all__ = ["SymptomRepository"]
