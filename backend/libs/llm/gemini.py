"""
Gemini Client - 通过 LiteLLM 调用 Gemini

API Key 以 SecretStr 保存，只在调用 acompletion 时取出。
上游错误信息可能包含请求 URL（含 key 参数），日志只记录异常类型。
"""

from collections.abc import Callable
from typing import Any

from litellm import acompletion  # pylint: disable=import-error
from pydantic import SecretStr

from exceptions import ExternalServiceError
from libs.config import AIConfig
from libs.llm.protocol import AIClient, InlineImage
from utils.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "gemini"


class GeminiClient:
    """绑定单个用户 API Key 的 Gemini 客户端"""

    def __init__(self, api_key: SecretStr, model: str) -> None:
        self._api_key = api_key
        self.model = model

    def __repr__(self) -> str:
        return f"GeminiClient(model={self.model!r}, api_key={self._api_key!r})"

    async def generate(
        self,
        prompt: str,
        response_schema: dict[str, Any] | None = None,
        image: InlineImage | None = None,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": self._build_content(prompt, image)}],
            "api_key": self._api_key.get_secret_value(),
        }
        if response_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": "response", "schema": response_schema},
            }

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(
                "Gemini call failed: model=%s error=%s status=%s",
                self.model,
                type(e).__name__,
                getattr(e, "status_code", None),
            )
            raise ExternalServiceError(
                SERVICE_NAME, "AI service request failed. Check your API key."
            ) from None

        text = self._extract_text(response)
        if not text:
            logger.error("Gemini returned empty content: model=%s", self.model)
            raise ExternalServiceError(SERVICE_NAME, "AI service returned an empty response")
        return text

    @staticmethod
    def _build_content(prompt: str, image: InlineImage | None) -> str | list[dict[str, Any]]:
        if image is None:
            return prompt
        return [
            {"type": "image_url", "image_url": {"url": image.as_data_uri()}},
            {"type": "text", "text": prompt},
        ]

    @staticmethod
    def _extract_text(response: Any) -> str:
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError):
            return ""
        return content.strip() if isinstance(content, str) else ""


def gemini_client_factory(config: AIConfig) -> Callable[[SecretStr], AIClient]:
    """返回按用户 Key 创建客户端的工厂（用于依赖注入）"""

    def factory(api_key: SecretStr) -> AIClient:
        return GeminiClient(api_key=api_key, model=config.ai_model)

    return factory
