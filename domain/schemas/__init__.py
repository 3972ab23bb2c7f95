"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.caller import CallerContext
from domain.schemas.meal_schemas import (
    IngredientCreate,
    MealCreate,
    IngredientResponse,
    AttendanceResponse,
    FeedbackResponse,
    MealResponse,
    MealDetailResponse,
    MealCreatedResponse,
    MealListResponse,
)

__all__ = [
    # Caller
    "CallerContext",
    # Meal request schemas
    "IngredientCreate",
    "MealCreate",
    # Meal response schemas
    "IngredientResponse",
    "AttendanceResponse",
    "FeedbackResponse",
    "MealResponse",
    "MealDetailResponse",
    "MealCreatedResponse",
    "MealListResponse",
]
