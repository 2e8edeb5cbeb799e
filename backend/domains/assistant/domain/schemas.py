"""
Assistant Response Schemas - AI 输出结构

- *_SCHEMA: 发送给模型的 JSON Schema（response_format）
- pydantic 模型: 校验模型返回的 JSON，不符合时视为上游错误
"""

from typing import Literal

from pydantic import BaseModel

SAFETY_LEVELS = ("An toàn", "Hạn chế", "Tránh")

CUSTOM_RECIPE_CATEGORY = "AI Tùy chỉnh"

MEAL_PLAN_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "day": {"type": "string", "description": "Ngày (ví dụ: Ngày 1, Thứ Hai)"},
            "meals": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "description": "Tên món ăn"},
                        "time": {"type": "string", "description": "Giờ ăn gợi ý (ví dụ: 7:00)"},
                        "portion": {"type": "string", "description": "Khẩu phần gợi ý"},
                        "note": {"type": "string", "description": "Lợi ích của món ăn"},
                    },
                    "required": ["name", "time", "portion", "note"],
                },
            },
        },
        "required": ["day", "meals"],
    },
}

FOOD_CHECK_SCHEMA = {
    "type": "object",
    "properties": {
        "safetyLevel": {"type": "string", "enum": list(SAFETY_LEVELS)},
        "reason": {"type": "string", "description": "Lý do của đánh giá"},
        "scientificEvidence": {"type": "string", "description": "Dẫn chứng khoa học và nguồn"},
    },
    "required": ["safetyLevel", "reason"],
}

RECIPE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "cookTime": {"type": "string"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "instructions": {"type": "string"},
    },
    "required": ["title", "description", "cookTime", "ingredients", "instructions"],
}


class Meal(BaseModel):
    name: str
    time: str
    portion: str
    note: str


class DayPlan(BaseModel):
    day: str
    meals: list[Meal]


class FoodCheckResult(BaseModel):
    safetyLevel: Literal["An toàn", "Hạn chế", "Tránh"]
    reason: str
    scientificEvidence: str | None = None


class RecipeSuggestion(BaseModel):
    title: str
    description: str
    cookTime: str
    ingredients: list[str]
    instructions: str
    category: str = CUSTOM_RECIPE_CATEGORY
