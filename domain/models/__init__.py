"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    engine_options,
    init_database,
    get_db_session,
)
from domain.models.meal import Meal, MealIngredient, MealAttendance, MealFeedback

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "engine_options",
    "init_database",
    "get_db_session",
    # Meal models
    "Meal",
    "MealIngredient",
    "MealAttendance",
    "MealFeedback",
]
