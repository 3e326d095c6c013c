"""Schemas for the stateless nutrition endpoints."""

from pydantic import BaseModel, Field
from typing import Optional, Union


class BodyProfileRequest(BaseModel):
    """Body metrics. Fields may be omitted; the calculator decides what that means."""

    weight_kg: Optional[float] = Field(None, gt=0, examples=[70.0], description="Body weight in kilograms")
    height_cm: Optional[float] = Field(None, gt=0, examples=[170.0], description="Height in centimeters")
    age: Optional[int] = Field(None, ge=0, le=120, examples=[25], description="Age in whole years")
    gender: Optional[str] = Field(None, examples=["male"], description="male, female or other/prefer_not_to_say")
    activity_level: Optional[Union[int, str]] = Field(
        None, examples=[3], description="1 (sedentary) to 5 (athlete), or a label such as 'moderate'"
    )


class TdeeResponse(BaseModel):
    bmr: float
    tdee: float
    activity_level: int
    gender: str


class MacroRequest(BaseModel):
    """Inputs for the goal-adjusted macro split."""

    tdee: float = Field(..., gt=0, examples=[2545.9])
    goal: str = Field(..., examples=["maintain"])
    weight_kg: float = Field(..., gt=0, examples=[70.0])
    weekly_pace: Optional[float] = Field(None, ge=0, le=2, examples=[0.5], description="Target kg per week")


class MacroResponse(BaseModel):
    goal: str
    calories: int
    protein: int
    carbs: int
    fat: int


class BmiRequest(BaseModel):
    height_cm: float = Field(..., gt=0, examples=[170.0])
    weight_kg: float = Field(..., gt=0, examples=[70.0])


class BmiResponse(BaseModel):
    bmi: float
    category: str


class MacroSplitRequest(BaseModel):
    """Custom share of daily calories per macro, in whole percent."""

    protein: int = Field(..., ge=0, le=100, examples=[30])
    carbs: int = Field(..., ge=0, le=100, examples=[50])
    fat: int = Field(..., ge=0, le=100, examples=[20])


class MacroPresetInfo(BaseModel):
    id: str
    protein: int
    carbs: int
    fat: int
