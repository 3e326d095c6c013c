"""SQLAlchemy ORM models for the calorie tracker.

`User` holds the onboarding answers together with the calculated daily
targets; `FoodLog` holds what the user ate. Models carry no business logic.
"""

from sqlalchemy import Boolean, Column, Integer, String, Float, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class User(Base):
    """Onboarding profile and calculated nutrition targets for one user.

    `external_id` is the identity issued by the auth provider; goals are a
    JSON-encoded list in selection order. With `use_auto_macros` off the
    targets come from the stored percentage split instead of per-kg factors.
    """

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    gender = Column(String, nullable=False)
    birthday = Column(Date, nullable=True)
    age = Column(Integer, nullable=False)
    height_cm = Column(Float, nullable=False)
    weight_kg = Column(Float, nullable=False)
    activity_level = Column(Integer, nullable=False)
    goals = Column(Text, nullable=False)
    primary_goal = Column(String, nullable=False)
    goal_label = Column(String, nullable=True)
    target_weight_kg = Column(Float, nullable=True)
    weekly_pace = Column(Float, nullable=False)
    tdee = Column(Float, nullable=False)
    target_calories = Column(Integer, nullable=False)
    target_protein = Column(Integer, nullable=False)
    target_carbs = Column(Integer, nullable=False)
    target_fat = Column(Integer, nullable=False)
    use_auto_macros = Column(Boolean, nullable=False, default=True)
    macro_preset = Column(String, nullable=True)
    macro_protein_pct = Column(Integer, nullable=True)
    macro_carbs_pct = Column(Integer, nullable=True)
    macro_fat_pct = Column(Integer, nullable=True)
    onboarding_completed_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class FoodLog(Base):
    """ORM model for a single logged food item."""

    __tablename__ = "food_logs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    log_date = Column(Date, nullable=False, index=True)
    name = Column(String, nullable=False)
    calories = Column(Float, nullable=False)
    protein = Column(Float, nullable=False, default=0.0)
    carbs = Column(Float, nullable=False, default=0.0)
    fat = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)
