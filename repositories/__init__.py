"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.meal_repository import (
    MealRepository,
    MealCreated,
    MealConflict,
    MealCreateResult,
)

__all__ = [
    "BaseRepository",
    "MealRepository",
    "MealCreated",
    "MealConflict",
    "MealCreateResult",
]
