"""Schemas for goal listing and goal resolution."""

from pydantic import BaseModel, Field
from typing import Dict, List


class GoalInfo(BaseModel):
    """A goal together with its affinity towards every other goal."""

    id: str
    label: str
    priorities: Dict[str, int]


class GoalSelectionRequest(BaseModel):
    """One to three goals in the order the user picked them."""

    goals: List[str] = Field(
        ...,
        min_length=1,
        max_length=3,
        examples=[["lose_weight", "gain_muscle"]],
        description="Goal ids or display labels, e.g. 'lose_weight' or 'Lose weight'",
    )


class RankedGoal(BaseModel):
    goal: str
    normalized_score: float
    weight: float


class GoalResolutionResponse(BaseModel):
    """Primary goal plus every selected goal ranked by normalized score."""

    primary_goal: str
    composite_label: str
    ranked_goals: List[RankedGoal]
