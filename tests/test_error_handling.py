"""Test error handling functionality.

Verifies that custom exceptions carry the expected attributes and that the
FastAPI handlers render them in the standard error envelope.
"""
import asyncio
import json

import pytest
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import OperationalError
from starlette.requests import Request

from core import config
from core.error_handlers import (
    app_exception_handler,
    create_error_response,
    generic_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from core.exceptions import (
    ConfigurationError,
    DatabaseError,
    InvalidInputError,
    MissingInputError,
    NotFoundError,
)
from database import init_db
from database.database import ReadSessionLocal
from main import health


def _request(path="/api/goals/resolve"):
    return Request({
        "type": "http",
        "method": "POST",
        "path": path,
        "headers": [],
        "query_string": b"",
        "scheme": "http",
        "server": ("testserver", 80),
    })


def test_exception_classes_have_proper_attributes():
    exc = InvalidInputError("Unknown goal 'fly'", field="goals", value="fly")
    assert exc.status_code == 400
    assert exc.details == {"field": "goals", "value": "fly"}

    exc = MissingInputError("weight_kg")
    assert exc.status_code == 422
    assert "weight_kg" in exc.message

    exc = NotFoundError("User", "abc")
    assert exc.status_code == 404
    assert "abc" in exc.message

    assert DatabaseError("boom", operation="create").details == {"operation": "create"}
    assert ConfigurationError("bad", config_key="LOG_LEVEL").status_code == 500


def test_error_envelope_shape():
    response = create_error_response("Nope", status_code=400, details={"field": "goals"})
    body = json.loads(response.body)
    assert response.status_code == 400
    assert body == {"error": {"message": "Nope", "status_code": 400, "details": {"field": "goals"}}}


def test_error_envelope_omits_empty_details():
    body = json.loads(create_error_response("Nope", status_code=404).body)
    assert "details" not in body["error"]


def test_app_exception_handler_uses_exception_status():
    response = asyncio.run(app_exception_handler(_request(), MissingInputError("age")))
    body = json.loads(response.body)
    assert response.status_code == 422
    assert body["error"]["details"] == {"field": "age"}


def test_invalid_missing_input_policy_rejected(monkeypatch):
    monkeypatch.setenv("MISSING_INPUT_POLICY", "guess")
    with pytest.raises(ConfigurationError) as exc_info:
        config._read_policy()
    assert exc_info.value.details == {"config_key": "MISSING_INPUT_POLICY"}


@pytest.mark.parametrize("raw", ["fast", "-1"])
def test_invalid_default_weekly_pace_rejected(monkeypatch, raw):
    monkeypatch.setenv("DEFAULT_WEEKLY_PACE", raw)
    with pytest.raises(ConfigurationError):
        config._read_weekly_pace()


def test_validation_errors_become_per_field_entries():
    exc = RequestValidationError([
        {"loc": ("body", "weight"), "msg": "Input should be greater than 0", "type": "greater_than"},
        {"loc": ("body", "goals"), "msg": "Field required", "type": "missing"},
    ])
    response = asyncio.run(validation_exception_handler(_request("/api/users/u1/onboarding"), exc))
    body = json.loads(response.body)
    assert response.status_code == 422
    assert body["error"]["message"] == "Validation error"
    assert body["error"]["details"]["validation_errors"] == [
        {"field": "body.weight", "message": "Input should be greater than 0", "type": "greater_than"},
        {"field": "body.goals", "message": "Field required", "type": "missing"},
    ]


def test_database_errors_are_reported_generically():
    exc = OperationalError("SELECT * FROM users", {}, Exception("disk I/O error at /var/db/secret.db"))
    response = asyncio.run(sqlalchemy_exception_handler(_request(), exc))
    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["error"] == {
        "message": "A database error occurred",
        "status_code": 500,
        "details": {"type": "database_error"},
    }
    assert b"secret.db" not in response.body


def test_unhandled_errors_are_reported_generically():
    response = asyncio.run(generic_exception_handler(_request(), KeyError("tdee")))
    body = json.loads(response.body)
    assert response.status_code == 500
    assert body["error"]["details"] == {"type": "internal_error"}


class _BrokenSession:
    def execute(self, statement):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_health_reports_connected_database():
    init_db()
    db = ReadSessionLocal()
    try:
        assert health(db=db) == {"status": "healthy", "database": "connected"}
    finally:
        db.close()


def test_health_raises_database_error_when_unreachable():
    with pytest.raises(DatabaseError) as exc_info:
        health(db=_BrokenSession())
    assert exc_info.value.status_code == 500
    assert exc_info.value.details == {"operation": "health_check"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
