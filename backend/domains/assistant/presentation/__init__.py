"""Assistant Presentation Layer - AI 助手表示层"""

from domains.assistant.presentation.router import router

__all__ = ["router"]
