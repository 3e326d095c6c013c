"""Goal priority scoring.

A user picks up to three fitness goals during onboarding. Some of them pull
in opposite directions, so each goal carries a hand-authored affinity vector
towards every other goal. For a multi-goal selection every goal is scored by
how much affinity it has towards the rest of the selection, normalised by the
affinity it could have towards the whole catalogue. The best-scoring goal
becomes the primary goal that drives calorie and macro targets.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from core.exceptions import InvalidInputError
from core.logger import get_logger

logger = get_logger("services.goal_resolver")

MAX_SELECTED_GOALS = 3


class Goal(str, Enum):
    """Canonical goal identifiers, as stored in the database."""

    LOSE_WEIGHT = "lose_weight"
    GAIN_MUSCLE = "gain_muscle"
    MAINTAIN = "maintain"
    BOOST_ENERGY = "boost_energy"
    IMPROVE_NUTRITION = "improve_nutrition"
    GAIN_WEIGHT = "gain_weight"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, raw) -> "Goal":
        """Map a goal id, display label or legacy db value to a Goal.

        Raises:
            InvalidInputError: for anything that is not a known goal.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidInputError("Goal must be a non-empty string", field="goals", value=raw)
        key = raw.strip().lower().replace("-", "_").replace(" ", "_")
        goal = _GOAL_ALIASES.get(key)
        if goal is None:
            raise InvalidInputError(f"Unknown goal '{raw}'", field="goals", value=raw)
        return goal


# older screens stored these spellings
_GOAL_ALIASES: Dict[str, Goal] = {g.value: g for g in Goal}
_GOAL_ALIASES.update({
    "weight_loss": Goal.LOSE_WEIGHT,
    "lose": Goal.LOSE_WEIGHT,
    "build_muscle": Goal.GAIN_MUSCLE,
    "muscle_gain": Goal.GAIN_MUSCLE,
    "maintain_weight": Goal.MAINTAIN,
    "improve_health": Goal.IMPROVE_NUTRITION,
    "healthy_lifestyle": Goal.IMPROVE_NUTRITION,
    "weight_gain": Goal.GAIN_WEIGHT,
    "gain": Goal.GAIN_WEIGHT,
})

# affinity of the row goal towards each column goal, 0 (conflicting) .. 5 (synergistic)
GOAL_PRIORITIES: Dict[Goal, Dict[Goal, int]] = {
    Goal.LOSE_WEIGHT: {
        Goal.GAIN_MUSCLE: 3, Goal.MAINTAIN: 2, Goal.BOOST_ENERGY: 3,
        Goal.IMPROVE_NUTRITION: 4, Goal.GAIN_WEIGHT: 1,
    },
    Goal.GAIN_MUSCLE: {
        Goal.LOSE_WEIGHT: 2, Goal.MAINTAIN: 3, Goal.BOOST_ENERGY: 3,
        Goal.IMPROVE_NUTRITION: 4, Goal.GAIN_WEIGHT: 5,
    },
    Goal.MAINTAIN: {
        Goal.LOSE_WEIGHT: 2, Goal.GAIN_MUSCLE: 2, Goal.BOOST_ENERGY: 4,
        Goal.IMPROVE_NUTRITION: 5, Goal.GAIN_WEIGHT: 1,
    },
    Goal.BOOST_ENERGY: {
        Goal.LOSE_WEIGHT: 1, Goal.GAIN_MUSCLE: 3, Goal.MAINTAIN: 4,
        Goal.IMPROVE_NUTRITION: 5, Goal.GAIN_WEIGHT: 2,
    },
    Goal.IMPROVE_NUTRITION: {
        Goal.LOSE_WEIGHT: 3, Goal.GAIN_MUSCLE: 4, Goal.MAINTAIN: 5,
        Goal.BOOST_ENERGY: 5, Goal.GAIN_WEIGHT: 2,
    },
    Goal.GAIN_WEIGHT: {
        Goal.LOSE_WEIGHT: 0, Goal.GAIN_MUSCLE: 4, Goal.MAINTAIN: 1,
        Goal.BOOST_ENERGY: 2, Goal.IMPROVE_NUTRITION: 3,
    },
}


@dataclass(frozen=True)
class GoalResolution:
    """Outcome of resolving a goal selection.

    `ranked_goals` holds every selected goal with its normalised score,
    best first. `weights` are the scores rescaled to sum to 1.
    """

    primary_goal: Goal
    ranked_goals: Tuple[Tuple[Goal, float], ...]
    weights: Tuple[Tuple[Goal, float], ...]

    def composite_label(self) -> str:
        """Render e.g. ``"Lose Weight (66%) + Gain Muscle (34%)"``."""
        if len(self.weights) == 1:
            return self.primary_goal.label
        return " + ".join(f"{goal.label} ({round(share * 100)}%)" for goal, share in self.weights)


class GoalPriorityResolver:
    """Scores goal selections against a priority table."""

    def __init__(self, priorities: Dict[Goal, Dict[Goal, int]] = None):
        self.priorities = priorities if priorities is not None else GOAL_PRIORITIES

    def validate_selection(self, selection: Iterable) -> List[Goal]:
        """Parse and check a raw selection: 1..3 distinct known goals."""
        if selection is None:
            raise InvalidInputError("Goal selection must not be empty", field="goals")
        if isinstance(selection, str):
            raise InvalidInputError("Goal selection must be a list of goals, not a single string",
                                    field="goals", value=selection)
        goals = [Goal.parse(item) for item in selection]
        if not goals:
            raise InvalidInputError("Goal selection must not be empty", field="goals")
        if len(goals) > MAX_SELECTED_GOALS:
            raise InvalidInputError(
                f"At most {MAX_SELECTED_GOALS} goals can be selected, got {len(goals)}", field="goals"
            )
        if len(set(goals)) != len(goals):
            raise InvalidInputError("Goal selection contains duplicates", field="goals",
                                    value=[g.value for g in goals])
        return goals

    def max_possible(self, goal: Goal) -> int:
        vector = self.priorities.get(goal, {})
        return sum(score for other, score in vector.items() if other != goal)

    def normalized_score(self, goal: Goal, selection: List[Goal]) -> float:
        vector = self.priorities.get(goal, {})
        raw = sum(vector.get(other, 0) for other in selection if other != goal)
        max_possible = self.max_possible(goal)
        if max_possible <= 0:
            return 0.0
        return raw / max_possible

    def resolve_primary_goal(self, selection: Iterable) -> GoalResolution:
        """Resolve a selection into a primary goal plus a ranked list.

        A single goal wins outright with score 1.0. Otherwise the highest
        normalised score wins and ties go to whichever goal was selected
        first.

        Raises:
            InvalidInputError: empty selection, unknown goal, duplicates or
                more than three goals.
        """
        goals = self.validate_selection(selection)

        if len(goals) == 1:
            only = goals[0]
            return GoalResolution(primary_goal=only, ranked_goals=((only, 1.0),), weights=((only, 1.0),))

        scored = [(goal, self.normalized_score(goal, goals)) for goal in goals]
        # sorted() is stable, so equal scores keep selection order
        ranked = tuple(sorted(scored, key=lambda item: item[1], reverse=True))
        primary = ranked[0][0]

        total = sum(score for _, score in ranked)
        if total > 0:
            weights = tuple((goal, score / total) for goal, score in ranked)
        else:
            weights = tuple((goal, 1.0 if goal == primary else 0.0) for goal, _ in ranked)

        logger.debug("Resolved goals %s -> primary=%s ranked=%s",
                     [g.value for g in goals], primary.value, ranked)
        return GoalResolution(primary_goal=primary, ranked_goals=ranked, weights=weights)


# export singleton
goal_resolver = GoalPriorityResolver()
__all__ = ["Goal", "GOAL_PRIORITIES", "GoalResolution", "GoalPriorityResolver", "goal_resolver"]
