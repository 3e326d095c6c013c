"""Schemas for onboarding and stored user targets."""

from datetime import date
from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Literal, Optional, Union

from .goal_schema import RankedGoal
from .nutrition_schema import MacroSplitRequest


class OnboardingRequest(BaseModel):
    """Everything the onboarding wizard collects.

    Either `birthday` or `age` must be given. With ``unit='imperial'`` height
    is in feet and weights are in pounds. Setting `use_auto_macros` to false
    splits the goal calories by `macro_preset` or `macro_split` instead of
    the per-kg goal factors.
    """

    name: Optional[str] = Field(None, examples=["Alex"])
    gender: str = Field(..., examples=["female"], description="male, female or prefer_not_to_say")
    birthday: Optional[date] = Field(None, examples=["1999-04-12"])
    age: Optional[int] = Field(None, ge=0, le=120, examples=[25])
    unit: Literal["metric", "imperial"] = Field("metric", examples=["metric"])
    height: float = Field(..., gt=0, examples=[170.0])
    weight: float = Field(..., gt=0, examples=[70.0])
    activity_level: Union[int, str] = Field(..., examples=[3])
    goals: List[str] = Field(..., min_length=1, max_length=3, examples=[["lose_weight", "improve_nutrition"]])
    target_weight: Optional[float] = Field(None, gt=0, examples=[62.0])
    weekly_pace: Optional[float] = Field(None, ge=0, le=2, examples=[0.5], description="Target kg per week")
    use_auto_macros: bool = Field(True, examples=[False])
    macro_preset: Optional[str] = Field(
        None, examples=["keto"], description="general, fitness, keto or low_carb"
    )
    macro_split: Optional[MacroSplitRequest] = None

    @model_validator(mode="after")
    def _age_or_birthday(self):
        if self.birthday is None and self.age is None:
            raise ValueError("either birthday or age is required")
        return self

    @model_validator(mode="after")
    def _manual_macros_need_a_split(self):
        if not self.use_auto_macros and self.macro_preset is None and self.macro_split is None:
            raise ValueError("macro_preset or macro_split is required when use_auto_macros is false")
        if self.macro_preset is not None and self.macro_split is not None:
            raise ValueError("give either macro_preset or macro_split, not both")
        return self


class GoalProjectionResponse(BaseModel):
    kg_to_change: float
    weeks: float
    target_date: str


class UserTargetsResponse(BaseModel):
    """Stored profile and daily targets for a user."""

    external_id: str
    name: Optional[str]
    age: int
    height_cm: float
    weight_kg: float
    bmi: float
    bmi_category: str
    activity_level: int
    primary_goal: str
    goal_label: Optional[str]
    ranked_goals: List[RankedGoal] = []
    weekly_pace: float
    tdee: float
    target_calories: int
    target_macros: dict
    use_auto_macros: bool = True
    macro_preset: Optional[str] = None
    macro_split: Optional[Dict[str, int]] = None
    projection: Optional[GoalProjectionResponse] = None
    updated_at: str
