"""Nutrition API router.

Stateless endpoints over the calculator: TDEE for a body profile, the
goal-adjusted macro split, BMI, and the fixed macro presets.
"""

from typing import List

from fastapi import APIRouter, Depends

from core.logger import get_logger
from database.deps import get_calculator
from services.goal_resolver import Goal
from services.nutrition_calculator import MACRO_PRESETS, BodyProfile, NutritionCalculator
from schemas import (
    BodyProfileRequest,
    TdeeResponse,
    MacroRequest,
    MacroResponse,
    BmiRequest,
    BmiResponse,
    MacroPresetInfo,
)

logger = get_logger("api.nutrition")
router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


@router.post("/tdee", response_model=TdeeResponse)
def compute_tdee(payload: BodyProfileRequest, calculator: NutritionCalculator = Depends(get_calculator)):
    """Return BMR and TDEE for a body profile.

    Raises:
        MissingInputError: a field is absent and no fallback is configured.
        InvalidInputError: unknown gender or activity level.
    """
    profile = calculator.complete_profile(BodyProfile(**payload.model_dump()))
    bmr = calculator.calculate_bmr(profile)
    tdee = calculator.compute_tdee(profile)
    return TdeeResponse(
        bmr=round(bmr, 1),
        tdee=round(tdee, 1),
        activity_level=profile.activity_level,
        gender=profile.gender.value,
    )


@router.post("/macros", response_model=MacroResponse)
def compute_macros(payload: MacroRequest, calculator: NutritionCalculator = Depends(get_calculator)):
    """Return daily calories and macro grams for a goal."""
    result = calculator.compute_macros(payload.tdee, payload.goal, payload.weight_kg, payload.weekly_pace)
    logger.info("Macros for %s: %s", payload.goal, result.as_dict())
    return MacroResponse(goal=Goal.parse(payload.goal).value, **result.as_dict())


@router.post("/bmi", response_model=BmiResponse)
def compute_bmi(payload: BmiRequest, calculator: NutritionCalculator = Depends(get_calculator)):
    bmi = calculator.calculate_bmi(payload.height_cm, payload.weight_kg)
    return BmiResponse(bmi=bmi, category=calculator.bmi_category(bmi))


@router.get("/macro-presets", response_model=List[MacroPresetInfo])
def list_macro_presets():
    """Percentage splits offered instead of automatic macros."""
    return [
        MacroPresetInfo(id=name, protein=split.protein_pct, carbs=split.carbs_pct, fat=split.fat_pct)
        for name, split in MACRO_PRESETS.items()
    ]
