"""
Assistant Presentation Schemas - AI 助手请求响应模式

profile 与 symptoms 由前端随请求提交（与存储的数据一致）。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from libs.llm import InlineImage


class ProfileBody(BaseModel):
    """带健康档案的请求基类"""

    model_config = ConfigDict(populate_by_name=True)

    profile: dict[str, Any] = Field(default_factory=dict)


class MealPlanRequest(ProfileBody):
    """饮食计划请求"""

    symptoms: list[dict[str, Any]] = Field(default_factory=list)


class FoodImage(BaseModel):
    """食物照片（base64）"""

    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field(..., alias="mimeType", pattern=r"^image/[\w.+-]+$")
    data: str = Field(..., min_length=1)

    def to_inline_image(self) -> InlineImage:
        return InlineImage(mime_type=self.mime_type, data=self.data)


class CheckFoodRequest(ProfileBody):
    """食物检查请求"""

    food_name: str = Field(..., alias="foodName", min_length=1)
    food_image: FoodImage | None = Field(default=None, alias="foodImage")


class AnalyzeTriggersRequest(ProfileBody):
    """诱因分析请求"""

    symptoms: list[dict[str, Any]] = Field(default_factory=list)


class SuggestRecipeRequest(ProfileBody):
    """食谱建议请求"""

    request: str = Field(..., min_length=1)


class AnalysisResponse(BaseModel):
    """诱因分析响应"""

    analysis: str
