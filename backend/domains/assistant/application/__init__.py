"""Assistant Domain - Application Layer"""

from domains.assistant.application.assistant_use_case import AssistantUseCase

__all__ = ["AssistantUseCase"]
