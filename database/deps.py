"""FastAPI dependencies for routers.

Routers that write use `get_db_write`; read-only routes use `get_db_read`
so they can be pointed at a replica. The calculator dependencies return the
module singletons and exist so tests can override them.
"""

from .database import get_read_session, get_write_session
from services.goal_resolver import GoalPriorityResolver, goal_resolver
from services.nutrition_calculator import NutritionCalculator, nutrition_calculator


def get_db_write():
    """Yield a write-capable DB session."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session."""
    yield from get_read_session()


def get_goal_resolver() -> GoalPriorityResolver:
    return goal_resolver


def get_calculator() -> NutritionCalculator:
    return nutrition_calculator
