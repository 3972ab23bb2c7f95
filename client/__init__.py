"""Client package - controllers for the admin front end"""

from client.meal_form import IngredientRow, MealFormState, MealFormController

__all__ = ["IngredientRow", "MealFormState", "MealFormController"]
