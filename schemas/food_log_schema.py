"""Schemas for food logging and the daily dashboard."""

from datetime import date
from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class FoodLogCreateRequest(BaseModel):
    """A food item the user ate."""

    name: str = Field(..., min_length=1, examples=["Greek yogurt"])
    calories: float = Field(..., ge=0, examples=[150.0])
    protein: float = Field(0.0, ge=0, examples=[15.0])
    carbs: float = Field(0.0, ge=0, examples=[8.0])
    fat: float = Field(0.0, ge=0, examples=[4.0])
    log_date: Optional[date] = Field(None, examples=["2026-10-19"], description="Defaults to today")


class FoodLogResponse(BaseModel):
    id: int
    name: str
    log_date: str
    calories: float
    protein: float
    carbs: float
    fat: float


class DailySummaryResponse(BaseModel):
    """Targets versus consumption for one day."""

    date: str
    target: Dict[str, float]
    consumed: Dict[str, float]
    remaining: Dict[str, float]
    progress: Dict[str, float]
    entries: List[FoodLogResponse]
