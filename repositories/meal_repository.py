"""
Meal Repository - Data access layer for meal operations
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Sequence, Tuple, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.enums import MealType
from domain.models import Meal, MealIngredient

logger = logging.getLogger("messplanner.repositories.meal")

MEAL_SLOT_CONSTRAINT = "uq_meal_type_date"
# SQLSTATE for unique_violation (PostgreSQL)
PG_UNIQUE_VIOLATION = "23505"


@dataclass(frozen=True)
class MealCreated:
    """The meal and its ingredients were inserted"""

    meal: Meal


@dataclass(frozen=True)
class MealConflict:
    """Another meal already occupies the (type, date) slot"""

    meal_type: MealType
    meal_date: date


MealCreateResult = Union[MealCreated, MealConflict]


def is_meal_slot_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from the one-meal-per-type-per-date rule"""
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        constraint = getattr(getattr(orig, "diag", None), "constraint_name", None)
        return constraint in (None, MEAL_SLOT_CONSTRAINT)
    message = str(orig)
    return "UNIQUE constraint failed" in message and "meal.type" in message


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def list_with_details(self) -> List[Meal]:
        """All meals with ingredients, attendance and feedback, newest date first"""
        return (
            self.db.query(Meal)
            .options(
                selectinload(Meal.ingredients),
                selectinload(Meal.attendance),
                selectinload(Meal.feedback),
            )
            .order_by(Meal.date.desc(), Meal.created_at.desc())
            .all()
        )

    def create_with_ingredients(
        self,
        title: str,
        meal_type: MealType,
        meal_date: date,
        img_url: str,
        ingredients: Sequence[Tuple[str, int]],
    ) -> MealCreateResult:
        """
        Insert a meal and its ingredient rows in one transaction.

        Args:
            title: Meal title
            meal_type: Service slot
            meal_date: Calendar date of the service
            img_url: Image reference
            ingredients: (item_name, grams_per_pax) pairs

        Returns:
            MealCreated with the persisted meal, or MealConflict when the
            (type, date) slot is already taken. Any other error is re-raised
            after the session is rolled back.
        """
        meal = Meal(
            title=title,
            type=meal_type,
            date=meal_date,
            img_url=img_url,
            ingredients=[
                MealIngredient(item_name=name, grams_per_pax=grams)
                for name, grams in ingredients
            ],
        )
        try:
            self.db.add(meal)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_meal_slot_violation(exc):
                logger.info(
                    "Meal slot already taken: type=%s date=%s",
                    meal_type.value,
                    meal_date.isoformat(),
                )
                return MealConflict(meal_type=meal_type, meal_date=meal_date)
            raise
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(meal)
        return MealCreated(meal=meal)
