"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest
from datetime import date

from sugarreset.core.errors import (
    CheckInBeforePlanStartError,
    FutureCheckInError,
    InvalidCheckInError,
    InvalidDateRangeError,
    InvalidHealthScoreError,
    PersistenceError,
    UnknownPlanTypeError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from tests.conftest import new_user_id


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_future_check_in_error(self):
        err = FutureCheckInError(day=date(2026, 10, 20), today=date(2026, 10, 18))
        assert err.http_status == 422
        assert err.code == "CHECK_IN_IN_FUTURE"
        assert "2026-10-20" in err.message
        d = err.to_dict()
        assert d["details"]["day"] == "2026-10-20"
        assert d["details"]["today"] == "2026-10-18"

    def test_before_plan_start_error(self):
        err = CheckInBeforePlanStartError(day=date(2026, 9, 1), plan_start=date(2026, 10, 1))
        assert err.http_status == 422
        assert err.code == "CHECK_IN_BEFORE_PLAN_START"
        assert err.details["plan_start"] == "2026-10-01"

    def test_unknown_plan_type_error(self):
        err = UnknownPlanTypeError("keto")
        assert err.code == "UNKNOWN_PLAN_TYPE"
        assert "keto" in err.message

    def test_invalid_check_in_error(self):
        err = InvalidCheckInError("mood", "mood must be between 1 and 5.")
        assert err.http_status == 422
        assert err.details == {"field": "mood"}

    def test_invalid_health_score_error(self):
        err = InvalidHealthScoreError(140)
        assert err.code == "INVALID_HEALTH_SCORE"
        assert "140" in err.message

    def test_invalid_date_range_error(self):
        err = InvalidDateRangeError(start=date(2026, 10, 5), end=date(2026, 10, 1))
        assert err.code == "INVALID_DATE_RANGE"

    def test_user_errors(self):
        assert UserNotFoundError("u1").http_status == 404
        assert UserAlreadyExistsError("u1").http_status == 409
        assert UserNotFoundError("u1").details["user_id"] == "u1"

    def test_persistence_error(self):
        err = PersistenceError("put_check_in")
        assert err.http_status == 503
        assert err.code == "STORE_UNAVAILABLE"
        assert err.details["operation"] == "put_check_in"

    def test_to_dict_without_details(self):
        err = PersistenceError("x")
        err.details = {}
        d = err.to_dict()
        assert set(d) == {"code", "message"}


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

def _enroll(client, plan_started_at="2026-10-01T09:00:00") -> str:
    uid = new_user_id()
    r = client.post("/users", json={
        "user_id": uid, "plan_type": "gradual", "plan_started_at": plan_started_at,
    })
    assert r.status_code == 201
    return uid


class TestValidationErrors:
    def test_unknown_plan_type_in_path(self, client):
        r = client.get("/plans/keto")
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = [e["field"] for e in body["details"]["errors"]]
        assert any("plan_type" in f for f in fields)

    def test_field_errors_have_field_message_type(self, client):
        r = client.post("/users", json={"user_id": new_user_id(), "plan_type": "keto"})
        errors = r.json()["details"]["errors"]
        assert errors
        for e in errors:
            assert set(e) == {"field", "message", "type"}
        assert errors[0]["field"] == "plan_type"

    def test_unknown_plan_type_on_enroll(self, client):
        r = client.post("/users", json={"user_id": new_user_id(), "plan_type": "keto"})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_missing_sugar_free(self, client):
        uid = _enroll(client)
        r = client.post(f"/users/{uid}/check-ins", json={})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("extra", [
        {"mood": 0},
        {"mood": 6},
        {"craving_level": 10},
        {"grams_consumed": -1},
        {"notes": "x" * 201},
    ])
    def test_out_of_range_extras(self, client, extra):
        uid = _enroll(client)
        r = client.post(f"/users/{uid}/check-ins", json={"sugar_free": True, **extra})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_health_score_out_of_range(self, client):
        uid = _enroll(client)
        r = client.put(f"/users/{uid}/health-score", json={"health_score": 101})
        assert r.status_code == 422


class TestDomainErrors:
    def test_future_check_in(self, client):
        uid = _enroll(client)
        r = client.post(f"/users/{uid}/check-ins", json={"day": "2026-10-19", "sugar_free": True})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "CHECK_IN_IN_FUTURE"
        assert body["details"]["today"] == "2026-10-18"

    def test_check_in_before_plan_start(self, client):
        uid = _enroll(client)
        r = client.post(f"/users/{uid}/check-ins", json={"day": "2026-09-30", "sugar_free": True})
        assert r.status_code == 422
        assert r.json()["code"] == "CHECK_IN_BEFORE_PLAN_START"

    def test_unknown_user(self, client):
        r = client.post("/users/ghost/check-ins", json={"sugar_free": True})
        assert r.status_code == 404
        assert r.json()["code"] == "USER_NOT_FOUND"

    def test_duplicate_enrollment(self, client):
        uid = _enroll(client)
        r = client.post("/users", json={"user_id": uid, "plan_type": "cold_turkey"})
        assert r.status_code == 409
        assert r.json()["code"] == "USER_ALREADY_EXISTS"

    def test_inverted_range(self, client):
        uid = _enroll(client)
        r = client.get(f"/users/{uid}/check-ins?start=2026-10-10&end=2026-10-05")
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_DATE_RANGE"
