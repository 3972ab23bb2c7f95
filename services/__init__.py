"""Services package - Business logic layer"""

from services.meal_service import MealService
from services.meal_validation import validate_meal_payload

__all__ = [
    "MealService",
    "validate_meal_payload",
]
