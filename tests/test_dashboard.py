"""Unit tests for the daily dashboard summary."""

from services.dashboard import consumed_totals, daily_summary
from services.nutrition_calculator import MacroResult


class DummyEntry:
    """Stand-in for the FoodLog ORM row."""
    def __init__(self, calories, protein, carbs, fat):
        self.calories = calories
        self.protein = protein
        self.carbs = carbs
        self.fat = fat


TARGETS = MacroResult(calories=2000, protein_grams=150, carbs_grams=200, fat_grams=60)


def test_consumed_totals_sum_entries():
    totals = consumed_totals([DummyEntry(300, 20, 30, 10), DummyEntry(450.5, 35, 40, 12.5)])
    assert totals == {"calories": 750.5, "protein": 55.0, "carbs": 70.0, "fat": 22.5}


def test_summary_with_no_entries():
    summary = daily_summary(TARGETS, [])
    assert summary["consumed"]["calories"] == 0.0
    assert summary["remaining"] == {"calories": 2000, "protein": 150, "carbs": 200, "fat": 60}
    assert summary["progress"]["fat"] == 0.0


def test_remaining_goes_negative_when_target_exceeded():
    summary = daily_summary(TARGETS, [DummyEntry(2500, 100, 300, 80)])
    assert summary["remaining"]["calories"] == -500
    assert summary["remaining"]["carbs"] == -100
    assert summary["progress"]["calories"] == 125.0


def test_zero_target_reports_zero_progress():
    no_carbs = MacroResult(calories=1200, protein_grams=200, carbs_grams=0, fat_grams=60)
    summary = daily_summary(no_carbs, [DummyEntry(500, 40, 20, 10)])
    assert summary["progress"]["carbs"] == 0.0
    assert summary["progress"]["protein"] == 20.0
