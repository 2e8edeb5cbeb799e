from domains.health.infrastructure.models.symptom import Symptom

__all__ = ["Symptom"]
