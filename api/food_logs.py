"""Food log and dashboard API router.

Food entries are stored per user and day; the dashboard compares a day's
entries with the user's stored targets.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.users import stored_targets
from core.logger import get_logger
from core.repository import FoodLogRepository, UserRepository
from database import models
from database.deps import get_db_read, get_db_write
from services.dashboard import daily_summary
from schemas import FoodLogCreateRequest, FoodLogResponse, DailySummaryResponse

logger = get_logger("api.food_logs")
router = APIRouter(prefix="/api/users", tags=["food-logs"])


def _entry_response(entry: models.FoodLog) -> FoodLogResponse:
    return FoodLogResponse(
        id=entry.id,
        name=entry.name,
        log_date=entry.log_date.isoformat(),
        calories=entry.calories,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
    )


@router.post("/{external_id}/food-logs", response_model=FoodLogResponse, status_code=201)
def log_food(external_id: str, payload: FoodLogCreateRequest, db: Session = Depends(get_db_write)):
    """Store a food entry for the user.

    Raises:
        NotFoundError: unknown user.
    """
    user = UserRepository(db).require(external_id)
    entry = FoodLogRepository(db).create(models.FoodLog(
        user_id=user.id,
        log_date=payload.log_date or date.today(),
        name=payload.name,
        calories=payload.calories,
        protein=payload.protein,
        carbs=payload.carbs,
        fat=payload.fat,
    ))
    logger.info("Logged %s (%s kcal) for %s on %s", entry.name, entry.calories, external_id, entry.log_date)
    return _entry_response(entry)


@router.get("/{external_id}/dashboard", response_model=DailySummaryResponse)
def get_dashboard(external_id: str, day: Optional[date] = None, db: Session = Depends(get_db_read)):
    """Return targets, consumption, remaining and progress for a day (default today).

    Raises:
        NotFoundError: unknown user.
    """
    user = UserRepository(db).require(external_id)
    day = day or date.today()
    entries = FoodLogRepository(db).for_day(user.id, day)
    summary = daily_summary(stored_targets(user), entries)
    return DailySummaryResponse(
        date=day.isoformat(),
        entries=[_entry_response(e) for e in entries],
        **summary,
    )
