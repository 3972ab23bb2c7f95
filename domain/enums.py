"""
Domain enums for MessPlanner application.
Contains all enumeration types used across the domain models.
"""

import enum


class MealType(str, enum.Enum):
    """Meal service slots in a day"""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"


class UserRole(str, enum.Enum):
    """Roles carried by an authenticated caller"""

    ADMIN = "ADMIN"
    STUDENT = "STUDENT"


class AttendanceStatus(str, enum.Enum):
    """Whether a diner plans to attend a meal"""

    ATTENDING = "ATTENDING"
    SKIPPING = "SKIPPING"
