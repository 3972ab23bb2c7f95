"""
Boundary validation for meal creation payloads.

Checks run in a fixed order and stop at the first failure so that callers get
one specific message. Once the ordered checks pass, the normalized payload is
handed to the typed MealCreate schema, which also rejects unknown fields.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

from app.exceptions import ServiceValidationError
from domain.enums import MealType
from domain.schemas.meal_schemas import MealCreate

MISSING_FIELDS = "Missing required fields: title, type, date"
INVALID_MEAL_TYPE = "Invalid meal type. Must be BREAKFAST, LUNCH, or DINNER"
NO_INGREDIENTS = "At least one ingredient is required"
INCOMPLETE_INGREDIENT = "Each ingredient must have itemName and gramsPerPax"
GRAMS_NOT_WHOLE = "gramsPerPax must be a whole number"
GRAMS_NOT_POSITIVE = "gramsPerPax must be greater than 0"
GRAMS_TOO_LARGE = "gramsPerPax must be at most 2147483647"
INVALID_DATE = "Invalid date format"
INVALID_PAYLOAD = "Invalid meal payload"

_MEAL_TYPES = {t.value for t in MealType}
_INTEGER_RE = re.compile(r"[+-]?\d+")
# Largest value the grams_per_pax INTEGER column holds
MAX_GRAMS_PER_PAX = 2**31 - 1


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    return isinstance(value, str) and not value.strip()


def parse_grams(value: Any) -> int:
    """
    Parse a grams-per-person value into a positive int that fits the column.

    Accepts ints, integral floats and strings holding an integer. Fractional
    values are rejected rather than truncated.
    """
    if isinstance(value, bool):
        raise ServiceValidationError(GRAMS_NOT_WHOLE)
    if isinstance(value, int):
        grams = value
    elif isinstance(value, float) and value.is_integer():
        grams = int(value)
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        grams = int(value.strip())
    else:
        raise ServiceValidationError(GRAMS_NOT_WHOLE)

    if grams <= 0:
        raise ServiceValidationError(GRAMS_NOT_POSITIVE)
    if grams > MAX_GRAMS_PER_PAX:
        raise ServiceValidationError(GRAMS_TOO_LARGE)
    return grams


def parse_meal_date(value: Any) -> date:
    """
    Derive the calendar date of a meal.

    Accepts YYYY-MM-DD or a full ISO 8601 timestamp; aware timestamps are
    converted to UTC before the date is taken.
    """
    if not isinstance(value, str):
        raise ServiceValidationError(INVALID_DATE)
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ServiceValidationError(INVALID_DATE) from None
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def validate_meal_payload(payload: Any) -> MealCreate:
    """
    Validate a raw POST /meals body.

    Raises:
        ServiceValidationError: with the message of the first failed check
    """
    if not isinstance(payload, Mapping):
        payload = {}

    title = payload.get("title")
    meal_type = payload.get("type")
    raw_date = payload.get("date")

    if _is_blank(title) or _is_blank(meal_type) or _is_blank(raw_date):
        raise ServiceValidationError(MISSING_FIELDS)

    if not isinstance(meal_type, str) or meal_type not in _MEAL_TYPES:
        raise ServiceValidationError(INVALID_MEAL_TYPE)

    ingredients = payload.get("ingredients")
    if not isinstance(ingredients, list) or not ingredients:
        raise ServiceValidationError(NO_INGREDIENTS)

    normalized_ingredients = []
    for ingredient in ingredients:
        if not isinstance(ingredient, Mapping):
            raise ServiceValidationError(INCOMPLETE_INGREDIENT)
        if _is_blank(ingredient.get("itemName")) or _is_blank(
            ingredient.get("gramsPerPax")
        ):
            raise ServiceValidationError(INCOMPLETE_INGREDIENT)
        grams = parse_grams(ingredient["gramsPerPax"])
        normalized_ingredients.append({**ingredient, "gramsPerPax": grams})

    meal_date = parse_meal_date(raw_date)

    img_url = payload.get("imgURL")
    normalized = {
        **payload,
        "date": meal_date,
        "imgURL": None if _is_blank(img_url) else img_url,
        "ingredients": normalized_ingredients,
    }
    try:
        return MealCreate.model_validate(normalized)
    except ValidationError as exc:
        raise ServiceValidationError(
            INVALID_PAYLOAD,
            details={
                "errors": exc.errors(
                    include_url=False, include_context=False, include_input=False
                )
            },
        ) from exc
