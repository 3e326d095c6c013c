"""Daily dashboard: stored targets against what was logged for the day."""

from typing import Dict, Iterable

from services.nutrition_calculator import MacroResult

NUTRIENTS = ("calories", "protein", "carbs", "fat")


def consumed_totals(entries: Iterable) -> Dict[str, float]:
    """Sum calories and macros over food-log-like objects."""
    totals = {key: 0.0 for key in NUTRIENTS}
    for entry in entries:
        for key in NUTRIENTS:
            totals[key] += getattr(entry, key) or 0.0
    return {key: round(value, 1) for key, value in totals.items()}


def daily_summary(targets: MacroResult, entries: Iterable) -> Dict[str, Dict[str, float]]:
    """Build the dashboard payload.

    `remaining` is allowed to go negative once a target is exceeded.
    `progress` is consumed as a percentage of target, 0 when the target is 0.
    """
    target = targets.as_dict()
    consumed = consumed_totals(entries)
    remaining = {key: round(target[key] - consumed[key], 1) for key in NUTRIENTS}
    progress = {
        key: round(consumed[key] / target[key] * 100, 1) if target[key] else 0.0
        for key in NUTRIENTS
    }
    return {"target": target, "consumed": consumed, "remaining": remaining, "progress": progress}
