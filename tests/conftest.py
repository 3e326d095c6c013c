"""Point the app at a throwaway SQLite database before anything imports it."""

import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="calorie_tracker_tests_")
os.environ["WRITE_DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp, 'test.db')}"
os.environ.pop("READ_DATABASE_URL", None)
os.environ["LOG_DIR"] = os.path.join(_tmp, "logs")
os.environ["MISSING_INPUT_POLICY"] = "strict"
os.environ["DEFAULT_WEEKLY_PACE"] = "0.5"
