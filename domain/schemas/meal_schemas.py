import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from domain.enums import MealType, AttendanceStatus


class IngredientCreate(BaseModel):
    """Ingredient row submitted with a new meal"""

    item_name: StrictStr = Field(..., alias="itemName", min_length=1)
    grams_per_pax: int = Field(
        ...,
        alias="gramsPerPax",
        gt=0,
        le=2**31 - 1,
        description="Grams needed per person served",
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class MealCreate(BaseModel):
    """Typed body of POST /meals, built once the payload passed the ordered checks"""

    title: StrictStr = Field(..., min_length=1)
    type: MealType
    date: dt.date
    img_url: Optional[StrictStr] = Field(
        None, alias="imgURL", description="Falls back to the placeholder image when empty"
    )
    ingredients: List[IngredientCreate] = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class IngredientResponse(BaseModel):
    id: UUID
    meal_id: UUID = Field(..., serialization_alias="mealId")
    item_name: str = Field(..., serialization_alias="itemName")
    grams_per_pax: int = Field(..., serialization_alias="gramsPerPax")

    model_config = {"from_attributes": True}


class AttendanceResponse(BaseModel):
    id: UUID
    meal_id: UUID = Field(..., serialization_alias="mealId")
    user_id: str = Field(..., serialization_alias="userId")
    status: AttendanceStatus
    created_at: Optional[dt.datetime] = Field(None, serialization_alias="createdAt")

    model_config = {"from_attributes": True}


class FeedbackResponse(BaseModel):
    id: UUID
    meal_id: UUID = Field(..., serialization_alias="mealId")
    user_id: str = Field(..., serialization_alias="userId")
    rating: int
    comment: Optional[str] = None
    created_at: Optional[dt.datetime] = Field(None, serialization_alias="createdAt")

    model_config = {"from_attributes": True}


class MealResponse(BaseModel):
    """A meal with its ingredient rows"""

    id: UUID
    title: str
    type: MealType
    date: dt.date
    img_url: str = Field(..., serialization_alias="imgURL")
    created_at: Optional[dt.datetime] = Field(None, serialization_alias="createdAt")
    ingredients: List[IngredientResponse] = []

    model_config = {"from_attributes": True}


class MealDetailResponse(MealResponse):
    """A meal as listed for admins, with attendance and feedback attached"""

    attendance: List[AttendanceResponse] = []
    feedback: List[FeedbackResponse] = []


class MealCreatedResponse(BaseModel):
    message: str = "Meal created successfully"
    meal: MealResponse


class MealListResponse(BaseModel):
    meals: List[MealDetailResponse]
