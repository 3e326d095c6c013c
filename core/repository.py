"""Repository classes wrapping SQLAlchemy sessions.

Routers talk to these instead of issuing queries inline. Commits happen here;
a failed commit is rolled back and surfaced as `DatabaseError`.
"""

from datetime import date
from typing import TypeVar, Generic, Type, Optional, List, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DatabaseError, NotFoundError
from core.logger import get_logger
from database.models import Base, FoodLog, User

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("%s %s failed: %s", operation, self.model.__name__, exc)
            raise DatabaseError(f"Could not {operation} {self.model.__name__}", operation=operation) from exc

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        self.session.add(obj)
        self._commit("create")
        self.session.refresh(obj)
        return obj

    def update(self, obj: T) -> T:
        """Commit changes to an existing object and refresh."""
        self._commit("update")
        self.session.refresh(obj)
        return obj

    def get_by_id(self, id: Any) -> Optional[T]:
        return self.session.get(self.model, id)

    def count(self) -> int:
        return self.session.query(self.model).count()


class UserRepository(BaseRepository[User]):
    """Users are addressed by the auth provider's identity, not the row id."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        return self.session.query(User).filter(User.external_id == external_id).one_or_none()

    def require(self, external_id: str) -> User:
        """Return the user or raise `NotFoundError`."""
        user = self.get_by_external_id(external_id)
        if user is None:
            raise NotFoundError("User", external_id)
        return user

    def upsert(self, external_id: str, **fields) -> User:
        """Insert the user, or overwrite the onboarding fields of an existing one."""
        user = self.get_by_external_id(external_id)
        if user is None:
            user = self.create(User(external_id=external_id, **fields))
            logger.info("Created user %s (id=%s)", external_id, user.id)
            return user
        for key, value in fields.items():
            setattr(user, key, value)
        user = self.update(user)
        logger.info("Updated user %s (id=%s)", external_id, user.id)
        return user


class FoodLogRepository(BaseRepository[FoodLog]):

    def __init__(self, session: Session):
        super().__init__(FoodLog, session)

    def for_day(self, user_id: int, day: date) -> List[FoodLog]:
        return (
            self.session.query(FoodLog)
            .filter(FoodLog.user_id == user_id, FoodLog.log_date == day)
            .order_by(FoodLog.created_at, FoodLog.id)
            .all()
        )
