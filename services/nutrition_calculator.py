"""Nutrition calculation helpers.

Provides BMR/TDEE (Mifflin-St Jeor), the goal-adjusted calorie and macro
split, BMI, and the small conversions the onboarding flow needs (age from
birthday, imperial to metric, goal date projection). Everything here is
pure: no I/O, no shared mutable state.
"""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Optional, Union

from core import config
from core.exceptions import InvalidInputError, MissingInputError
from core.logger import get_logger
from services.goal_resolver import Goal

logger = get_logger("services.nutrition_calculator")

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

CALORIE_FLOOR = 1200

ACTIVITY_MULTIPLIERS = {1: 1.2, 2: 1.375, 3: 1.55, 4: 1.725, 5: 1.9}

# labels used by the dashboard and activity screens
ACTIVITY_LABELS = {
    "sedentary": 1,
    "not_active": 1,
    "light": 2,
    "lightly_active": 2,
    "moderate": 3,
    "moderately_active": 3,
    "heavy": 4,
    "active": 4,
    "very_active": 4,
    "athlete": 5,
    "super_active": 5,
    "extremely_active": 5,
}

FT_TO_CM = 30.48
LB_TO_KG = 0.453592


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, raw) -> "Gender":
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().lower()
        if key in ("male", "m"):
            return cls.MALE
        if key in ("female", "f"):
            return cls.FEMALE
        if key in ("other", "prefer_not_to_say", "unspecified", "non_binary"):
            return cls.OTHER
        raise InvalidInputError(f"Unknown gender '{raw}'", field="gender", value=raw)


# Mifflin-St Jeor sex constant; OTHER takes the mean of the male and female values
BMR_SEX_OFFSET = {Gender.MALE: 5.0, Gender.FEMALE: -161.0, Gender.OTHER: -78.0}


@dataclass(frozen=True)
class GoalFactors:
    protein_per_kg: float
    fat_per_kg: float
    calorie_multiplier: float
    kcal_per_weekly_kg: float


GOAL_FACTORS: Dict[Goal, GoalFactors] = {
    Goal.LOSE_WEIGHT: GoalFactors(2.2, 0.8, 0.8, -1100.0),
    Goal.GAIN_MUSCLE: GoalFactors(2.4, 1.0, 1.1, 500.0),
    Goal.GAIN_WEIGHT: GoalFactors(2.0, 1.1, 1.15, 1100.0),
    Goal.MAINTAIN: GoalFactors(1.8, 0.8, 1.0, 0.0),
    Goal.BOOST_ENERGY: GoalFactors(1.8, 0.7, 1.0, 0.0),
    Goal.IMPROVE_NUTRITION: GoalFactors(2.0, 0.85, 1.0, 0.0),
}


@dataclass(frozen=True)
class MacroSplit:
    """Share of daily calories, in whole percent, given to each macro."""

    protein_pct: int
    carbs_pct: int
    fat_pct: int
    name: Optional[str] = field(default=None, compare=False)


# presets offered on the macro goals screen
MACRO_PRESETS: Dict[str, MacroSplit] = {
    "general": MacroSplit(30, 50, 20, name="general"),
    "fitness": MacroSplit(40, 40, 20, name="fitness"),
    "keto": MacroSplit(25, 5, 70, name="keto"),
    "low_carb": MacroSplit(40, 20, 40, name="low_carb"),
}

# used only when MISSING_INPUT_POLICY=fallback
FALLBACK_PROFILE = {
    "weight_kg": 70.0,
    "height_cm": 170.0,
    "age": 30,
    "gender": Gender.OTHER,
    "activity_level": 1,
}


@dataclass(frozen=True)
class BodyProfile:
    """Body metrics collected during onboarding. Any field may be missing."""

    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age: Optional[int] = None
    gender: Optional[Union[Gender, str]] = None
    activity_level: Optional[Union[int, str]] = None


@dataclass(frozen=True)
class MacroResult:
    calories: int
    protein_grams: int
    carbs_grams: int
    fat_grams: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "calories": self.calories,
            "protein": self.protein_grams,
            "carbs": self.carbs_grams,
            "fat": self.fat_grams,
        }


@dataclass(frozen=True)
class GoalProjection:
    kg_to_change: float
    weeks: float
    target_date: date


def parse_activity_level(raw) -> int:
    """Accept 1..5 or one of the named activity levels."""
    if isinstance(raw, str) and not raw.strip().isdigit():
        level = ACTIVITY_LABELS.get(raw.strip().lower())
        if level is None:
            raise InvalidInputError(f"Unknown activity level '{raw}'", field="activity_level", value=raw)
        return level
    if isinstance(raw, bool):
        raise InvalidInputError(f"Invalid activity level '{raw}'", field="activity_level", value=raw)
    if isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidInputError(f"Activity level must be a whole number, got {raw}",
                                    field="activity_level", value=raw)
    try:
        level = int(raw)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid activity level '{raw}'", field="activity_level", value=raw)
    if level not in ACTIVITY_MULTIPLIERS:
        raise InvalidInputError("Activity level must be between 1 and 5", field="activity_level", value=raw)
    return level


def parse_macro_preset(raw) -> MacroSplit:
    key = str(raw).strip().lower().replace("-", "_").replace(" ", "_")
    split = MACRO_PRESETS.get(key)
    if split is None:
        raise InvalidInputError(f"Unknown macro preset '{raw}'", field="macro_preset", value=raw)
    return split


def age_from_birthday(birthday: date, today: Optional[date] = None) -> int:
    """Whole years between `birthday` and `today`."""
    today = today or date.today()
    if birthday > today:
        raise InvalidInputError("Birthday cannot be in the future", field="birthday", value=birthday.isoformat())
    had_birthday = (today.month, today.day) >= (birthday.month, birthday.day)
    return today.year - birthday.year - (0 if had_birthday else 1)


def to_metric(height: float, weight: float, unit: str = "metric"):
    """Return ``(height_cm, weight_kg)``. Imperial height is in feet, weight in lb."""
    if unit == "metric":
        return height, weight
    if unit == "imperial":
        return height * FT_TO_CM, weight * LB_TO_KG
    raise InvalidInputError(f"Unknown unit system '{unit}'", field="unit", value=unit)


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def __init__(self, missing_input_policy: str = None, default_weekly_pace: float = None):
        self.missing_input_policy = missing_input_policy or config.MISSING_INPUT_POLICY
        self.default_weekly_pace = (
            config.DEFAULT_WEEKLY_PACE if default_weekly_pace is None else default_weekly_pace
        )

    # --------------- BMI -------------------------------------------
    def calculate_bmi(self, height_cm: float, weight_kg: float) -> float:
        """Calculate BMI from height in cm and weight in kg, rounded to 1 dp."""
        if height_cm is None or height_cm <= 0:
            raise InvalidInputError("Height must be positive", field="height_cm", value=height_cm)
        if weight_kg is None or weight_kg <= 0:
            raise InvalidInputError("Weight must be positive", field="weight_kg", value=weight_kg)
        h_m = height_cm / 100.0
        return round(weight_kg / (h_m * h_m), 1)

    @staticmethod
    def bmi_category(bmi: float) -> str:
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal Weight"
        if bmi < 30:
            return "Overweight"
        return "Obese"

    # --------------- BMR / TDEE ------------------------------------
    def complete_profile(self, profile: BodyProfile) -> BodyProfile:
        """Validate a profile and fill gaps according to the missing-input policy.

        Returns a profile with every field set and `gender`/`activity_level`
        normalised.

        Raises:
            MissingInputError: a field is absent and the policy is ``strict``.
            InvalidInputError: a field is present but out of range.
        """
        filled = {}
        for name, default in FALLBACK_PROFILE.items():
            value = getattr(profile, name)
            if value is None:
                if self.missing_input_policy != "fallback":
                    raise MissingInputError(name)
                logger.info("Using fallback %s=%s", name, default)
                value = default
            filled[name] = value

        if filled["weight_kg"] <= 0:
            raise InvalidInputError("Weight must be positive", field="weight_kg", value=filled["weight_kg"])
        if filled["height_cm"] <= 0:
            raise InvalidInputError("Height must be positive", field="height_cm", value=filled["height_cm"])
        if filled["age"] < 0:
            raise InvalidInputError("Age cannot be negative", field="age", value=filled["age"])
        filled["gender"] = Gender.parse(filled["gender"])
        filled["activity_level"] = parse_activity_level(filled["activity_level"])
        return replace(profile, **filled)

    @staticmethod
    def _bmr(p: BodyProfile) -> float:
        base = 10 * p.weight_kg + 6.25 * p.height_cm - 5 * p.age
        return base + BMR_SEX_OFFSET[p.gender]

    def calculate_bmr(self, profile: BodyProfile) -> float:
        """Calculate BMR using Mifflin-St Jeor."""
        return self._bmr(self.complete_profile(profile))

    def compute_tdee(self, profile: BodyProfile) -> float:
        """Estimate total daily energy expenditure: BMR times activity multiplier."""
        p = self.complete_profile(profile)
        tdee = self._bmr(p) * ACTIVITY_MULTIPLIERS[p.activity_level]
        logger.debug("TDEE calculated: %s", tdee)
        return tdee

    # --------------- Calories + macros -----------------------------
    def target_calories(self, tdee: float, goal: Goal, weekly_pace: float) -> float:
        """Goal-adjusted daily calories before rounding, never below the floor."""
        factors = GOAL_FACTORS[goal]
        raw = tdee * factors.calorie_multiplier + weekly_pace * factors.kcal_per_weekly_kg
        if raw < CALORIE_FLOOR:
            logger.info("Calories %.1f below floor for goal %s, clamping to %s", raw, goal.value, CALORIE_FLOOR)
            return float(CALORIE_FLOOR)
        return raw

    def compute_macros(
        self,
        tdee: float,
        goal,
        weight_kg: float,
        weekly_pace: Optional[float] = None,
    ) -> MacroResult:
        """Derive calories and macro grams for a goal.

        Protein and fat are set per kg of body weight; carbs take whatever
        calories remain. When protein and fat alone exceed the budget carbs
        are 0 and the macro calories will be above `calories`.

        Raises:
            MissingInputError: `tdee` or `weight_kg` is None.
            InvalidInputError: non-positive tdee/weight, negative pace or
                unknown goal.
        """
        if tdee is None:
            raise MissingInputError("tdee")
        if weight_kg is None:
            raise MissingInputError("weight_kg")
        if tdee <= 0:
            raise InvalidInputError("TDEE must be positive", field="tdee", value=tdee)
        if weight_kg <= 0:
            raise InvalidInputError("Weight must be positive", field="weight_kg", value=weight_kg)
        if weekly_pace is None:
            weekly_pace = self.default_weekly_pace
        if weekly_pace < 0:
            raise InvalidInputError("Weekly pace cannot be negative", field="weekly_pace", value=weekly_pace)

        goal = Goal.parse(goal)
        factors = GOAL_FACTORS[goal]

        calories = int(round(self.target_calories(tdee, goal, weekly_pace)))
        protein_g = int(round(weight_kg * factors.protein_per_kg))
        fat_g = int(round(weight_kg * factors.fat_per_kg))

        remaining = calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
        if remaining < 0:
            logger.warning(
                "Protein+fat (%s kcal) exceed calorie budget %s for goal %s; carbs set to 0",
                calories - remaining, calories, goal.value,
            )
        carbs_g = max(0, int(round(remaining / KCAL_PER_G_CARBS)))

        result = MacroResult(calories=calories, protein_grams=protein_g, carbs_grams=carbs_g, fat_grams=fat_g)
        logger.debug("Macros calculated for %s: %s", goal.value, result)
        return result

    def split_calories(self, calories: int, split: MacroSplit) -> MacroResult:
        """Divide a calorie target by fixed percentages instead of per-kg factors.

        Raises:
            InvalidInputError: a negative share, or shares not summing to 100.
        """
        shares = {"protein": split.protein_pct, "carbs": split.carbs_pct, "fat": split.fat_pct}
        for name, pct in shares.items():
            if pct < 0:
                raise InvalidInputError(f"{name} share cannot be negative", field="macro_split", value=pct)
        if sum(shares.values()) != 100:
            raise InvalidInputError("Macro shares must add up to 100", field="macro_split", value=shares)

        result = MacroResult(
            calories=calories,
            protein_grams=int(round(calories * split.protein_pct / 100 / KCAL_PER_G_PROTEIN)),
            carbs_grams=int(round(calories * split.carbs_pct / 100 / KCAL_PER_G_CARBS)),
            fat_grams=int(round(calories * split.fat_pct / 100 / KCAL_PER_G_FAT)),
        )
        logger.debug("Calories split %s: %s", shares, result)
        return result

    # --------------- Goal timeline ---------------------------------
    def project_goal_date(
        self,
        weight_kg: float,
        target_weight_kg: Optional[float],
        weekly_pace: float,
        start: Optional[date] = None,
    ) -> Optional[GoalProjection]:
        """When the target weight is reached at `weekly_pace` kg/week.

        Returns None when there is no target, nothing to change, or no pace.
        """
        if target_weight_kg is None or not weekly_pace or weekly_pace <= 0:
            return None
        kg_to_change = round(abs(weight_kg - target_weight_kg), 1)
        if kg_to_change == 0:
            return None
        weeks = kg_to_change / weekly_pace
        start = start or date.today()
        return GoalProjection(
            kg_to_change=kg_to_change,
            weeks=round(weeks, 1),
            target_date=start + timedelta(days=round(weeks * 7)),
        )


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = [
    "BodyProfile",
    "Gender",
    "GoalProjection",
    "MACRO_PRESETS",
    "MacroResult",
    "MacroSplit",
    "NutritionCalculator",
    "age_from_birthday",
    "nutrition_calculator",
    "parse_activity_level",
    "parse_macro_preset",
    "to_metric",
]
