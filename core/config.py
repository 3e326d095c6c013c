"""Runtime configuration read from environment variables.

Values are resolved once at import time. Database URLs default to a local
SQLite file so the service runs without any setup.
"""

import os

from core.exceptions import ConfigurationError

# Read/Write partitioning: point READ_DATABASE_URL at a replica in production.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///calorie_tracker.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))

MISSING_INPUT_POLICIES = ("strict", "fallback")


def _read_policy() -> str:
    policy = os.getenv("MISSING_INPUT_POLICY", "strict").strip().lower()
    if policy not in MISSING_INPUT_POLICIES:
        raise ConfigurationError(
            f"MISSING_INPUT_POLICY must be one of {', '.join(MISSING_INPUT_POLICIES)}, got '{policy}'",
            config_key="MISSING_INPUT_POLICY",
        )
    return policy


def _read_weekly_pace() -> float:
    raw = os.getenv("DEFAULT_WEEKLY_PACE", "0.5")
    try:
        pace = float(raw)
    except ValueError:
        raise ConfigurationError(f"DEFAULT_WEEKLY_PACE is not a number: '{raw}'", config_key="DEFAULT_WEEKLY_PACE")
    if pace < 0:
        raise ConfigurationError("DEFAULT_WEEKLY_PACE must be >= 0", config_key="DEFAULT_WEEKLY_PACE")
    return pace


MISSING_INPUT_POLICY = _read_policy()
DEFAULT_WEEKLY_PACE = _read_weekly_pace()
