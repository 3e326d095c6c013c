"""Tests for goal priority scoring."""

import itertools

import pytest

from core.exceptions import InvalidInputError
from services.goal_resolver import Goal, GOAL_PRIORITIES, GoalPriorityResolver, goal_resolver


@pytest.mark.parametrize("goal", list(Goal))
def test_single_goal_wins_with_full_score(goal):
    res = goal_resolver.resolve_primary_goal([goal.value])
    assert res.primary_goal == goal
    assert res.ranked_goals == ((goal, 1.0),)
    assert res.composite_label() == goal.label


def test_single_goal_does_not_need_priority_table():
    resolver = GoalPriorityResolver(priorities={})
    assert resolver.resolve_primary_goal(["maintain"]).primary_goal == Goal.MAINTAIN


def test_pair_scores_are_normalised_by_full_vector():
    res = goal_resolver.resolve_primary_goal(["gain_muscle", "lose_weight"])
    scores = dict(res.ranked_goals)
    # lose_weight: 3 / (3+2+3+4+1), gain_muscle: 2 / (2+3+3+4+5)
    assert scores[Goal.LOSE_WEIGHT] == pytest.approx(3 / 13)
    assert scores[Goal.GAIN_MUSCLE] == pytest.approx(2 / 17)
    assert res.primary_goal == Goal.LOSE_WEIGHT
    assert [g for g, _ in res.ranked_goals] == [Goal.LOSE_WEIGHT, Goal.GAIN_MUSCLE]


def test_three_goals_ranked_descending():
    res = goal_resolver.resolve_primary_goal(["gain_muscle", "improve_nutrition", "lose_weight"])
    assert [g for g, _ in res.ranked_goals] == [
        Goal.LOSE_WEIGHT, Goal.IMPROVE_NUTRITION, Goal.GAIN_MUSCLE,
    ]
    assert dict(res.ranked_goals)[Goal.LOSE_WEIGHT] == pytest.approx(7 / 13)


def test_gain_weight_dominates_muscle_and_nutrition():
    res = goal_resolver.resolve_primary_goal(["improve_nutrition", "gain_muscle", "gain_weight"])
    assert res.primary_goal == Goal.GAIN_WEIGHT
    assert dict(res.ranked_goals)[Goal.GAIN_WEIGHT] == pytest.approx(7 / 10)


def test_primary_goal_independent_of_selection_order():
    for size in (2, 3):
        for combo in itertools.combinations(list(Goal), size):
            primaries = {goal_resolver.resolve_primary_goal(list(p)).primary_goal
                         for p in itertools.permutations(combo)}
            assert len(primaries) == 1, combo


def test_scores_are_bounded():
    for combo in itertools.combinations(list(Goal), 3):
        for _, score in goal_resolver.resolve_primary_goal(list(combo)).ranked_goals:
            assert 0.0 <= score <= 1.0


def test_ties_break_by_selection_order():
    flat = {g: {o: 1 for o in Goal if o != g} for g in Goal}
    resolver = GoalPriorityResolver(priorities=flat)
    assert resolver.resolve_primary_goal(["maintain", "boost_energy"]).primary_goal == Goal.MAINTAIN
    assert resolver.resolve_primary_goal(["boost_energy", "maintain"]).primary_goal == Goal.BOOST_ENERGY


def test_goal_without_priorities_scores_zero_and_loses():
    table = dict(GOAL_PRIORITIES)
    table[Goal.BOOST_ENERGY] = {}
    resolver = GoalPriorityResolver(priorities=table)
    res = resolver.resolve_primary_goal(["boost_energy", "maintain"])
    assert dict(res.ranked_goals)[Goal.BOOST_ENERGY] == 0.0
    assert res.primary_goal == Goal.MAINTAIN


def test_weights_sum_to_one_and_label_shows_shares():
    res = goal_resolver.resolve_primary_goal(["lose_weight", "gain_muscle"])
    assert sum(w for _, w in res.weights) == pytest.approx(1.0)
    assert res.composite_label() == "Lose Weight (66%) + Gain Muscle (34%)"


def test_resolution_is_deterministic():
    first = goal_resolver.resolve_primary_goal(["maintain", "boost_energy", "improve_nutrition"])
    second = goal_resolver.resolve_primary_goal(["maintain", "boost_energy", "improve_nutrition"])
    assert first == second
    assert first.primary_goal == Goal.MAINTAIN


@pytest.mark.parametrize("raw, expected", [
    ("Lose weight", Goal.LOSE_WEIGHT),
    ("weight_loss", Goal.LOSE_WEIGHT),
    ("Gain muscle", Goal.GAIN_MUSCLE),
    ("build_muscle", Goal.GAIN_MUSCLE),
    ("Boost Energy", Goal.BOOST_ENERGY),
    ("improve-nutrition", Goal.IMPROVE_NUTRITION),
    ("improve_health", Goal.IMPROVE_NUTRITION),
    ("Gain Weight", Goal.GAIN_WEIGHT),
    ("weight_gain", Goal.GAIN_WEIGHT),
    ("  MAINTAIN ", Goal.MAINTAIN),
])
def test_goal_aliases(raw, expected):
    assert Goal.parse(raw) == expected


@pytest.mark.parametrize("selection", [
    [],
    None,
    ["lose_weight", "gain_muscle", "maintain", "boost_energy"],
    ["lose_weight", "Lose weight"],
    ["fly"],
    [""],
])
def test_invalid_selections_rejected(selection):
    with pytest.raises(InvalidInputError) as exc_info:
        goal_resolver.resolve_primary_goal(selection)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details["field"] == "goals"


def test_bare_string_selection_rejected_as_a_whole():
    with pytest.raises(InvalidInputError) as exc_info:
        goal_resolver.resolve_primary_goal("lose_weight")
    assert "single string" in exc_info.value.message
    assert exc_info.value.details["value"] == "lose_weight"
