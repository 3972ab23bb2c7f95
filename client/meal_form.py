"""
Admin meal form controller.

Holds the draft state behind the "add meal" form, validates it locally and
submits it to POST /meals. Rendering is left to whatever front end drives it.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import httpx

from app.config import settings
from domain.enums import MealType

logger = logging.getLogger("messplanner.client.meal_form")

SUCCESS_DISPLAY_SECONDS = 4.0

TITLE_AND_DATE_REQUIRED = "Title and Date are required"
NO_INGREDIENTS = "At least one ingredient is required"
SUBMIT_FAILED = "Failed to create meal"

_FORM_FIELDS = {"title", "type", "date", "img_url"}
_ROW_FIELDS = {"item_name", "grams_per_pax"}


@dataclass
class IngredientRow:
    item_name: str = ""
    grams_per_pax: str = ""

    def is_filled(self) -> bool:
        return bool(self.item_name.strip()) and bool(str(self.grams_per_pax).strip())


@dataclass
class MealFormState:
    title: str = ""
    type: str = MealType.BREAKFAST.value
    date: str = ""
    img_url: str = ""
    ingredients: List[IngredientRow] = field(default_factory=lambda: [IngredientRow()])


class MealFormController:
    """
    Draft state and submission for the admin meal form.

    Args:
        http: Client used to reach the API (base_url and auth headers set by the caller)
        endpoint: Path of the create-meal endpoint
        clock: Monotonic time source, seconds
    """

    def __init__(
        self,
        http: httpx.Client,
        endpoint: str = "/meals",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.http = http
        self.endpoint = endpoint
        self.clock = clock
        self.state = MealFormState()
        self.loading = False
        self.error = ""
        self.last_meal: Optional[dict] = None
        self._success_at: Optional[float] = None

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        if name not in _FORM_FIELDS:
            raise KeyError(name)
        setattr(self.state, name, value)

    def update_ingredient(self, index: int, field_name: str, value: str) -> None:
        if field_name not in _ROW_FIELDS:
            raise KeyError(field_name)
        setattr(self.state.ingredients[index], field_name, value)

    def add_ingredient(self) -> None:
        self.state.ingredients.append(IngredientRow())

    def remove_ingredient(self, index: int) -> None:
        # One row always stays on the form
        if len(self.state.ingredients) <= 1:
            return
        del self.state.ingredients[index]

    def reset(self) -> None:
        self.state = MealFormState()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    @property
    def success_visible(self) -> bool:
        if self._success_at is None:
            return False
        return self.clock() - self._success_at < SUCCESS_DISPLAY_SECONDS

    def build_payload(self) -> dict:
        """JSON body for POST /meals; only filled ingredient rows are sent"""
        return {
            "title": self.state.title,
            "type": self.state.type,
            "date": self.state.date,
            "imgURL": self.state.img_url or settings.default_meal_image_url,
            "ingredients": [
                {"itemName": row.item_name, "gramsPerPax": row.grams_per_pax}
                for row in self.state.ingredients
                if row.is_filled()
            ],
        }

    def submit(self) -> bool:
        """
        Validate the draft and send it.

        Returns True when the meal was created. On failure ``error`` holds the
        message to show: a local one, or the server's message verbatim.
        """
        self.error = ""
        self._success_at = None

        if not self.state.title or not self.state.date:
            self.error = TITLE_AND_DATE_REQUIRED
            return False

        payload = self.build_payload()
        if not payload["ingredients"]:
            self.error = NO_INGREDIENTS
            return False

        self.loading = True
        try:
            response = self.http.post(self.endpoint, json=payload)
            data = self._json_or_empty(response)
            if response.is_error:
                self.error = data.get("error") or SUBMIT_FAILED
                logger.info(
                    f"Meal submission rejected with {response.status_code}: {self.error}"
                )
                return False
        except httpx.HTTPError as e:
            logger.warning(f"Meal submission failed: {e}")
            self.error = str(e) or SUBMIT_FAILED
            return False
        finally:
            self.loading = False

        self.last_meal = data.get("meal")
        self.reset()
        self._success_at = self.clock()
        return True

    @staticmethod
    def _json_or_empty(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
