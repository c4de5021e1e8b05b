"""
Custom exception hierarchy for the SugarReset API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from sugarreset.schemas.common import ErrorDetail

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class SugarResetException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class UnknownPlanTypeError(SugarResetException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "UNKNOWN_PLAN_TYPE"

    def __init__(self, plan_type: Any):
        super().__init__(
            message=f"Unknown plan type {plan_type!r}.",
            details={"plan_type": str(plan_type)},
        )


class FutureCheckInError(SugarResetException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "CHECK_IN_IN_FUTURE"

    def __init__(self, day: date, today: date):
        super().__init__(
            message=f"Cannot check in for {day}: it is after today ({today}).",
            details={"day": str(day), "today": str(today)},
        )


class CheckInBeforePlanStartError(SugarResetException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "CHECK_IN_BEFORE_PLAN_START"

    def __init__(self, day: date, plan_start: date):
        super().__init__(
            message=f"Cannot check in for {day}: the plan started on {plan_start}.",
            details={"day": str(day), "plan_start": str(plan_start)},
        )


class InvalidCheckInError(SugarResetException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_CHECK_IN"

    def __init__(self, field: str, message: str):
        super().__init__(message=message, details={"field": field})


class InvalidHealthScoreError(SugarResetException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_HEALTH_SCORE"

    def __init__(self, score: int):
        super().__init__(
            message=f"Health score must be between 0 and 100. Received {score}.",
            details={"score": score},
        )


class InvalidDateRangeError(SugarResetException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_DATE_RANGE"

    def __init__(self, start: date, end: date):
        super().__init__(
            message=f"Range start {start} is after range end {end}.",
            details={"start": str(start), "end": str(end)},
        )


class UserNotFoundError(SugarResetException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User {user_id!r} is not enrolled.",
            details={"user_id": user_id},
        )


class UserAlreadyExistsError(SugarResetException):
    http_status = status.HTTP_409_CONFLICT
    code = "USER_ALREADY_EXISTS"

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User {user_id!r} is already enrolled.",
            details={"user_id": user_id},
        )


class PersistenceError(SugarResetException):
    """The storage collaborator failed; the operation did not complete."""
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Storage operation {operation!r} failed. Nothing was changed.",
            details={"operation": operation},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def sugarreset_exception_handler(
    request: Request, exc: SugarResetException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump()
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
