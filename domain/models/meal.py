"""
Meal planning models: meals, their ingredients, and the attendance/feedback
collections attached to them.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Date,
    TIMESTAMP,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.enums import MealType, AttendanceStatus
from domain.models.database import Base


class Meal(Base):
    """A planned meal service; at most one per (type, date)"""

    __tablename__ = "meal"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    type = Column(SQLEnum(MealType, name="meal_type"), nullable=False)
    date = Column(Date, nullable=False)
    img_url = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    ingredients = relationship(
        "MealIngredient",
        back_populates="meal",
        cascade="all, delete-orphan",
    )
    attendance = relationship(
        "MealAttendance",
        back_populates="meal",
        cascade="all, delete-orphan",
    )
    feedback = relationship(
        "MealFeedback",
        back_populates="meal",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("type", "date", name="uq_meal_type_date"),
    )


class MealIngredient(Base):
    """Ingredient row owned by a single meal"""

    __tablename__ = "meal_ingredient"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    meal_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("meal.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_name = Column(Text, nullable=False)
    grams_per_pax = Column(Integer, nullable=False)

    meal = relationship("Meal", back_populates="ingredients")

    __table_args__ = (
        CheckConstraint("grams_per_pax > 0", name="ck_meal_ingredient_grams_positive"),
    )


class MealAttendance(Base):
    """Diner attendance for a meal (written by the attendance feature)"""

    __tablename__ = "meal_attendance"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    meal_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("meal.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(Text, nullable=False)
    status = Column(
        SQLEnum(AttendanceStatus, name="attendance_status"),
        nullable=False,
        default=AttendanceStatus.ATTENDING,
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    meal = relationship("Meal", back_populates="attendance")

    __table_args__ = (
        UniqueConstraint("meal_id", "user_id", name="uq_meal_attendance_user"),
    )


class MealFeedback(Base):
    """Diner feedback on a meal (written by the feedback feature)"""

    __tablename__ = "meal_feedback"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    meal_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("meal.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    meal = relationship("Meal", back_populates="feedback")

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_meal_feedback_rating_range"),
    )
