from typing import Any, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.config import settings
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    UnauthorizedError,
)
from domain.models import Meal
from domain.schemas.caller import CallerContext
from repositories import MealRepository, MealConflict
from services.meal_validation import validate_meal_payload

logger = logging.getLogger("messplanner.meals")

MEAL_SLOT_TAKEN = "A meal with this type already exists for the selected date"


class MealService:
    @staticmethod
    def authorize_admin(caller: Optional[CallerContext], action: str) -> CallerContext:
        """
        Ensure the caller is authenticated and holds the ADMIN role.

        Args:
            caller: Caller context from the session provider, None if unauthenticated
            action: Verb phrase used in the forbidden message ("create meals")

        Raises:
            UnauthorizedError: If there is no caller
            ForbiddenError: If the caller is not an admin
        """
        if caller is None:
            raise UnauthorizedError("Unauthorized: Not authenticated")
        if not caller.is_admin:
            logger.warning(
                f"Caller {caller.user_id} with role {caller.role.value} tried to {action}"
            )
            raise ForbiddenError(f"Forbidden: Only admins can {action}")
        return caller

    @staticmethod
    def create_meal(
        db: Session, caller: Optional[CallerContext], payload: Any
    ) -> Meal:
        """
        Create a meal together with its ingredient rows.

        The (type, date) slot is not checked up front: the unique constraint
        decides, so two concurrent creates cannot both succeed.

        Args:
            db: Database session
            caller: Caller context, None if unauthenticated
            payload: Raw decoded JSON body

        Returns:
            Meal: The persisted meal with ingredients attached

        Raises:
            UnauthorizedError, ForbiddenError: Caller checks failed
            ServiceValidationError: Payload rejected
            ConflictError: A meal already exists for the type and date
            InternalError: Unexpected store failure
        """
        MealService.authorize_admin(caller, "create meals")
        request = validate_meal_payload(payload)

        repo = MealRepository(db)
        try:
            result = repo.create_with_ingredients(
                title=request.title,
                meal_type=request.type,
                meal_date=request.date,
                img_url=request.img_url or settings.default_meal_image_url,
                ingredients=[
                    (ing.item_name, ing.grams_per_pax) for ing in request.ingredients
                ],
            )
        except SQLAlchemyError as e:
            logger.exception(f"Error creating meal: {e}")
            raise InternalError() from e

        if isinstance(result, MealConflict):
            raise ConflictError(
                MEAL_SLOT_TAKEN,
                details={
                    "type": result.meal_type.value,
                    "date": result.meal_date.isoformat(),
                },
            )

        logger.info(
            f"Meal created: id={result.meal.id} type={request.type.value} "
            f"date={request.date} ingredients={len(request.ingredients)} "
            f"by={caller.user_id}"
        )
        return result.meal

    @staticmethod
    def list_meals(db: Session, caller: Optional[CallerContext]) -> List[Meal]:
        """
        List all meals with ingredients, attendance and feedback, newest date first.

        Raises:
            UnauthorizedError, ForbiddenError: Caller checks failed
            InternalError: Unexpected store failure
        """
        MealService.authorize_admin(caller, "view meals")
        try:
            return MealRepository(db).list_with_details()
        except SQLAlchemyError as e:
            logger.exception(f"Error fetching meals: {e}")
            raise InternalError() from e
