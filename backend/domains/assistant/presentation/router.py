"""
Assistant API - Gemini 代理接口

所有接口都需要登录，并使用用户自己保存的 Gemini Key。
"""

from fastapi import APIRouter, Depends

from domains.assistant.application import AssistantUseCase
from domains.assistant.domain.schemas import DayPlan, FoodCheckResult, RecipeSuggestion
from domains.assistant.presentation.schemas import (
    AnalysisResponse,
    AnalyzeTriggersRequest,
    CheckFoodRequest,
    MealPlanRequest,
    SuggestRecipeRequest,
)
from domains.identity.presentation.deps import AuthUser
from libs.api.deps import get_assistant_service

router = APIRouter()


@router.post("/meal-plan")
async def meal_plan(
    data: MealPlanRequest,
    current_user: AuthUser,
    service: AssistantUseCase = Depends(get_assistant_service),
) -> list[DayPlan]:
    """生成 7 天饮食计划"""
    return await service.meal_plan(current_user.identity, data.profile, data.symptoms)


@router.post("/check-food", response_model_exclude_none=True)
async def check_food(
    data: CheckFoodRequest,
    current_user: AuthUser,
    service: AssistantUseCase = Depends(get_assistant_service),
) -> FoodCheckResult:
    """检查食物安全等级"""
    image = data.food_image.to_inline_image() if data.food_image else None
    return await service.check_food(current_user.identity, data.profile, data.food_name, image)


@router.post("/analyze-triggers")
async def analyze_triggers(
    data: AnalyzeTriggersRequest,
    current_user: AuthUser,
    service: AssistantUseCase = Depends(get_assistant_service),
) -> AnalysisResponse:
    """分析症状诱因"""
    analysis = await service.analyze_triggers(current_user.identity, data.profile, data.symptoms)
    return AnalysisResponse(analysis=analysis)


@router.post("/suggest-recipe")
async def suggest_recipe(
    data: SuggestRecipeRequest,
    current_user: AuthUser,
    service: AssistantUseCase = Depends(get_assistant_service),
) -> RecipeSuggestion:
    """生成定制食谱"""
    return await service.suggest_recipe(current_user.identity, data.profile, data.request)
