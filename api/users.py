"""User API router.

Completes onboarding (computing and storing daily targets keyed by the auth
provider's user id) and returns the stored targets.
"""

import json
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.goals import resolution_to_response
from core.logger import get_logger
from core.repository import UserRepository
from database import models
from database.deps import get_db_read, get_db_write, get_calculator, get_goal_resolver
from services.goal_resolver import GoalPriorityResolver
from services.nutrition_calculator import (
    BodyProfile,
    MacroResult,
    MacroSplit,
    NutritionCalculator,
    age_from_birthday,
    parse_macro_preset,
    to_metric,
)
from schemas import OnboardingRequest, UserTargetsResponse, GoalProjectionResponse

logger = get_logger("api.users")
router = APIRouter(prefix="/api/users", tags=["users"])


def stored_targets(user: models.User) -> MacroResult:
    return MacroResult(
        calories=user.target_calories,
        protein_grams=user.target_protein,
        carbs_grams=user.target_carbs,
        fat_grams=user.target_fat,
    )


def manual_split(payload: OnboardingRequest) -> Optional[MacroSplit]:
    """The percentage split chosen during onboarding, or None for automatic macros."""
    if payload.use_auto_macros:
        return None
    if payload.macro_preset is not None:
        return parse_macro_preset(payload.macro_preset)
    split = payload.macro_split
    return MacroSplit(split.protein, split.carbs, split.fat)


def _to_response(
    user: models.User,
    calculator: NutritionCalculator,
    resolver: GoalPriorityResolver,
) -> UserTargetsResponse:
    bmi = calculator.calculate_bmi(user.height_cm, user.weight_kg)
    resolution = resolver.resolve_primary_goal(json.loads(user.goals))
    # onboarding_completed_at is reset on every onboarding
    projection = calculator.project_goal_date(
        user.weight_kg, user.target_weight_kg, user.weekly_pace,
        start=user.onboarding_completed_at.date(),
    )
    macro_split = None
    if not user.use_auto_macros:
        macro_split = {
            "protein": user.macro_protein_pct,
            "carbs": user.macro_carbs_pct,
            "fat": user.macro_fat_pct,
        }
    return UserTargetsResponse(
        external_id=user.external_id,
        name=user.name,
        age=user.age,
        height_cm=round(user.height_cm, 1),
        weight_kg=round(user.weight_kg, 1),
        bmi=bmi,
        bmi_category=calculator.bmi_category(bmi),
        activity_level=user.activity_level,
        primary_goal=user.primary_goal,
        goal_label=user.goal_label,
        ranked_goals=resolution_to_response(resolution).ranked_goals,
        weekly_pace=user.weekly_pace,
        tdee=round(user.tdee, 1),
        target_calories=user.target_calories,
        target_macros=stored_targets(user).as_dict(),
        use_auto_macros=user.use_auto_macros,
        macro_preset=user.macro_preset,
        macro_split=macro_split,
        projection=GoalProjectionResponse(
            kg_to_change=projection.kg_to_change,
            weeks=projection.weeks,
            target_date=projection.target_date.isoformat(),
        ) if projection else None,
        updated_at=user.updated_at.isoformat(),
    )


@router.post("/{external_id}/onboarding", response_model=UserTargetsResponse, status_code=201)
def complete_onboarding(
    external_id: str,
    payload: OnboardingRequest,
    db: Session = Depends(get_db_write),
    calculator: NutritionCalculator = Depends(get_calculator),
    resolver: GoalPriorityResolver = Depends(get_goal_resolver),
):
    """Compute targets from the onboarding answers and store them.

    Goals are resolved to a primary goal, TDEE is derived from the body
    profile, and the macro split for the primary goal becomes the user's
    daily target. With `use_auto_macros` off the goal calories are split by
    the chosen preset or custom percentages instead. Calling this again
    overwrites the previous answers and restarts the goal projection.

    Raises:
        InvalidInputError: bad goals, gender, activity level, birthday or
            macro split.
        DatabaseError: if the upsert fails.
    """
    logger.info("Completing onboarding for %s (goals=%s)", external_id, payload.goals)
    resolution = resolver.resolve_primary_goal(payload.goals)

    height_cm, weight_kg = to_metric(payload.height, payload.weight, payload.unit)
    target_weight_kg = None
    if payload.target_weight is not None:
        _, target_weight_kg = to_metric(payload.height, payload.target_weight, payload.unit)
    age = age_from_birthday(payload.birthday) if payload.birthday else payload.age

    profile = calculator.complete_profile(BodyProfile(
        weight_kg=weight_kg,
        height_cm=height_cm,
        age=age,
        gender=payload.gender,
        activity_level=payload.activity_level,
    ))
    tdee = calculator.compute_tdee(profile)
    weekly_pace = calculator.default_weekly_pace if payload.weekly_pace is None else payload.weekly_pace
    macros = calculator.compute_macros(tdee, resolution.primary_goal, weight_kg, weekly_pace)
    split = manual_split(payload)
    if split is not None:
        macros = calculator.split_calories(macros.calories, split)

    user = UserRepository(db).upsert(
        external_id,
        name=payload.name,
        gender=profile.gender.value,
        birthday=payload.birthday,
        age=age,
        height_cm=height_cm,
        weight_kg=weight_kg,
        activity_level=profile.activity_level,
        goals=json.dumps([goal.value for goal in resolver.validate_selection(payload.goals)]),
        primary_goal=resolution.primary_goal.value,
        goal_label=resolution.composite_label(),
        target_weight_kg=target_weight_kg,
        weekly_pace=weekly_pace,
        tdee=tdee,
        target_calories=macros.calories,
        target_protein=macros.protein_grams,
        target_carbs=macros.carbs_grams,
        target_fat=macros.fat_grams,
        use_auto_macros=split is None,
        macro_preset=split.name if split else None,
        macro_protein_pct=split.protein_pct if split else None,
        macro_carbs_pct=split.carbs_pct if split else None,
        macro_fat_pct=split.fat_pct if split else None,
        onboarding_completed_at=datetime.utcnow(),
    )
    return _to_response(user, calculator, resolver)


@router.get("/{external_id}/targets", response_model=UserTargetsResponse)
def get_targets(
    external_id: str,
    db: Session = Depends(get_db_read),
    calculator: NutritionCalculator = Depends(get_calculator),
    resolver: GoalPriorityResolver = Depends(get_goal_resolver),
):
    """Return the stored profile and daily targets.

    Raises:
        NotFoundError: no user with this id has completed onboarding.
    """
    user = UserRepository(db).require(external_id)
    return _to_response(user, calculator, resolver)
