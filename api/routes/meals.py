"""Admin meal planning routes"""

from typing import Any, Optional
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
import logging

from api.dependencies import get_caller_context, get_db
from domain.schemas.caller import CallerContext
from domain.schemas.meal_schemas import (
    MealCreatedResponse,
    MealDetailResponse,
    MealListResponse,
    MealResponse,
)
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("messplanner.api.meals")


async def _read_json(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON"""
    body = await request.body()
    if not body:
        return None
    try:
        return await request.json()
    except ValueError:
        logger.info(f"Ignoring undecodable body on {request.url.path}")
        return None


def _create_meal(
    db: Session, caller: Optional[CallerContext], payload: Any
) -> MealCreatedResponse:
    meal = MealService.create_meal(db, caller, payload)
    return MealCreatedResponse(meal=MealResponse.model_validate(meal))


@router.post(
    "", response_model=MealCreatedResponse, status_code=status.HTTP_201_CREATED
)
async def create_meal(
    request: Request,
    caller: Optional[CallerContext] = Depends(get_caller_context),
    db: Session = Depends(get_db),
):
    """
    Create a meal with its ingredients (admins only).

    Body: {title, type, date, imgURL?, ingredients: [{itemName, gramsPerPax}]}

    The body is read here rather than declared as a parameter so that the
    caller is checked before any payload problem is reported.
    """
    payload = await _read_json(request)
    return await run_in_threadpool(_create_meal, db, caller, payload)


@router.get("", response_model=MealListResponse)
def list_meals(
    caller: Optional[CallerContext] = Depends(get_caller_context),
    db: Session = Depends(get_db),
):
    """List every meal with ingredients, attendance and feedback, newest date first (admins only)"""
    meals = MealService.list_meals(db, caller)
    return MealListResponse(
        meals=[MealDetailResponse.model_validate(m) for m in meals]
    )
