"""Database helpers: engines, session factories and schema creation.

Reads and writes go through separate engines so a read replica can be
configured via READ_DATABASE_URL; for SQLite both point at the same file.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core import config
from core.logger import get_logger
from .models import Base

logger = get_logger("database")


def _engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


write_engine = _engine(config.WRITE_DATABASE_URL)
read_engine = _engine(config.READ_DATABASE_URL)

WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db():
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=write_engine)
    logger.info("Database schema ready (%s)", write_engine.url.render_as_string(hide_password=True))


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
