"""
LLM - AI 代理组件

- protocol: AIClient 协议与 InlineImage
- gemini: 基于 LiteLLM 的 Gemini 实现
"""

from libs.llm.protocol import AIClient, InlineImage

__all__ = ["AIClient", "InlineImage"]
