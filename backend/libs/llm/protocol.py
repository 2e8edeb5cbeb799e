"""
AI Client Protocol - AI 代理抽象

定义跨域使用的生成接口，避免业务代码直接依赖 LiteLLM。
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class InlineImage:
    """内联图片（base64 编码）"""

    mime_type: str
    data: str

    def as_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class AIClient(Protocol):
    """
    AI 客户端协议

    每个实例绑定一个用户的 API Key，只用于一次下游调用。
    GeminiClient 实现此协议，测试中可替换为任意同形对象。
    """

    async def generate(
        self,
        prompt: str,
        response_schema: dict[str, Any] | None = None,
        image: InlineImage | None = None,
    ) -> str:
        """
        生成内容

        Args:
            prompt: 提示词
            response_schema: JSON Schema，提供时要求模型返回符合该结构的 JSON 文本
            image: 可选的内联图片

        Returns:
            模型返回的文本

        Raises:
            ExternalServiceError: 上游调用失败或返回为空
        """
        ...
