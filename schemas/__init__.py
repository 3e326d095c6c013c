"""Pydantic schema package for request and response models."""

from .goal_schema import GoalInfo, GoalSelectionRequest, GoalResolutionResponse, RankedGoal
from .nutrition_schema import (
    BodyProfileRequest,
    TdeeResponse,
    MacroRequest,
    MacroResponse,
    BmiRequest,
    BmiResponse,
    MacroSplitRequest,
    MacroPresetInfo,
)
from .user_schema import OnboardingRequest, UserTargetsResponse, GoalProjectionResponse
from .food_log_schema import FoodLogCreateRequest, FoodLogResponse, DailySummaryResponse

__all__ = [
    "GoalInfo",
    "GoalSelectionRequest",
    "GoalResolutionResponse",
    "RankedGoal",
    "BodyProfileRequest",
    "TdeeResponse",
    "MacroRequest",
    "MacroResponse",
    "BmiRequest",
    "BmiResponse",
    "MacroSplitRequest",
    "MacroPresetInfo",
    "OnboardingRequest",
    "UserTargetsResponse",
    "GoalProjectionResponse",
    "FoodLogCreateRequest",
    "FoodLogResponse",
    "DailySummaryResponse",
]
