"""Goals API router.

Lists the goal catalogue with its priority table and resolves a user's
goal selection into a primary goal.
"""

from fastapi import APIRouter, Depends
from typing import List

from core.logger import get_logger
from database.deps import get_goal_resolver
from services.goal_resolver import Goal, GoalPriorityResolver, GoalResolution
from schemas import GoalInfo, GoalSelectionRequest, GoalResolutionResponse, RankedGoal

logger = get_logger("api.goals")
router = APIRouter(prefix="/api/goals", tags=["goals"])


def resolution_to_response(resolution: GoalResolution) -> GoalResolutionResponse:
    """Convert a `GoalResolution` into its response schema."""
    weights = dict(resolution.weights)
    return GoalResolutionResponse(
        primary_goal=resolution.primary_goal.value,
        composite_label=resolution.composite_label(),
        ranked_goals=[
            RankedGoal(goal=goal.value, normalized_score=round(score, 4), weight=round(weights[goal], 4))
            for goal, score in resolution.ranked_goals
        ],
    )


@router.get("", response_model=List[GoalInfo])
def list_goals(resolver: GoalPriorityResolver = Depends(get_goal_resolver)):
    """Return every goal with its priority vector."""
    return [
        GoalInfo(
            id=goal.value,
            label=goal.label,
            priorities={other.value: score for other, score in resolver.priorities.get(goal, {}).items()},
        )
        for goal in Goal
    ]


@router.post("/resolve", response_model=GoalResolutionResponse)
def resolve_goals(payload: GoalSelectionRequest, resolver: GoalPriorityResolver = Depends(get_goal_resolver)):
    """Resolve a selection of one to three goals.

    Raises:
        InvalidInputError: unknown or duplicate goals.
    """
    resolution = resolver.resolve_primary_goal(payload.goals)
    logger.info("Resolved %s -> %s", payload.goals, resolution.primary_goal.value)
    return resolution_to_response(resolution)
