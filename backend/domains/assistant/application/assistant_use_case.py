"""
Assistant Use Case - AI 助手用例

每个操作先通过 UserSecretManager 取得绑定用户 Key 的客户端，
再调用一次模型。失败不重试，直接以 ExternalServiceError 返回。
"""

import json
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from domains.assistant.domain.prompts import (
    NOT_ENOUGH_DATA_MESSAGE,
    build_analyze_triggers_prompt,
    build_check_food_prompt,
    build_meal_plan_prompt,
    build_suggest_recipe_prompt,
)
from domains.assistant.domain.schemas import (
    CUSTOM_RECIPE_CATEGORY,
    FOOD_CHECK_SCHEMA,
    MEAL_PLAN_SCHEMA,
    RECIPE_SCHEMA,
    DayPlan,
    FoodCheckResult,
    RecipeSuggestion,
)
from domains.identity.application import UserSecretManager
from exceptions import ExternalServiceError
from libs.llm import InlineImage
from utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# 诱因分析至少需要的日志条数
MIN_LOGS_FOR_ANALYSIS = 3

_MEAL_PLAN_ADAPTER = TypeAdapter(list[DayPlan])


class AssistantUseCase:
    """AI 助手用例"""

    def __init__(self, manager: UserSecretManager) -> None:
        self.manager = manager

    async def meal_plan(
        self,
        email: str,
        profile: dict[str, Any],
        symptoms: list[dict[str, Any]],
    ) -> list[DayPlan]:
        """生成 7 天饮食计划"""
        client = await self.manager.get_ai_client_for(email)
        text = await client.generate(
            build_meal_plan_prompt(profile, symptoms),
            response_schema=MEAL_PLAN_SCHEMA,
        )
        return self._parse(text, _MEAL_PLAN_ADAPTER, "meal_plan", email)

    async def check_food(
        self,
        email: str,
        profile: dict[str, Any],
        food_name: str,
        food_image: InlineImage | None = None,
    ) -> FoodCheckResult:
        """评估某种食物对用户的安全等级，可附带照片"""
        client = await self.manager.get_ai_client_for(email)
        text = await client.generate(
            build_check_food_prompt(profile, food_name),
            response_schema=FOOD_CHECK_SCHEMA,
            image=food_image,
        )
        return self._parse(text, TypeAdapter(FoodCheckResult), "check_food", email)

    async def analyze_triggers(
        self,
        email: str,
        profile: dict[str, Any],
        symptoms: list[dict[str, Any]],
    ) -> str:
        """分析症状日志中的诱因

        日志少于 3 条时直接返回提示，不调用模型。
        """
        if len(symptoms) < MIN_LOGS_FOR_ANALYSIS:
            return NOT_ENOUGH_DATA_MESSAGE

        client = await self.manager.get_ai_client_for(email)
        return await client.generate(build_analyze_triggers_prompt(profile, symptoms))

    async def suggest_recipe(
        self,
        email: str,
        profile: dict[str, Any],
        request: str,
    ) -> RecipeSuggestion:
        """按用户要求生成一份安全食谱"""
        client = await self.manager.get_ai_client_for(email)
        text = await client.generate(
            build_suggest_recipe_prompt(profile, request),
            response_schema=RECIPE_SCHEMA,
        )
        recipe = self._parse(text, TypeAdapter(RecipeSuggestion), "suggest_recipe", email)
        return recipe.model_copy(update={"category": CUSTOM_RECIPE_CATEGORY})

    @staticmethod
    def _parse(text: str, adapter: TypeAdapter[T], operation: str, email: str) -> T:
        """解析模型返回的 JSON 文本"""
        try:
            return adapter.validate_python(json.loads(text))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.error(
                "Unparsable AI response during %s (identity=%s): %s",
                operation,
                email,
                type(e).__name__,
            )
            raise ExternalServiceError(
                "gemini", "AI service returned an unexpected response"
            ) from None

