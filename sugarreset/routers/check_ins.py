"""
Check-ins router.

POST /users/{user_id}/check-ins          record today or backfill a past day
GET  /users/{user_id}/check-ins          range, newest first
GET  /users/{user_id}/check-ins/today    has the user checked in today?
GET  /users/{user_id}/check-ins/{day}    one day
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from sugarreset.core.clock import Clock
from sugarreset.core.deps import get_clock, get_store
from sugarreset.core.errors import InvalidDateRangeError
from sugarreset.routers.users import streak_to_response
from sugarreset.schemas.check_in import (
    CheckInOutcomeResponse,
    CheckInRequest,
    CheckInResponse,
    TodayStatusResponse,
)
from sugarreset.schemas.common import ErrorResponse
from sugarreset.schemas.user import AchievementResponse
from sugarreset.services.check_in_ledger import CheckInLedger
from sugarreset.services.enrollment import get_profile
from sugarreset.services.records import CheckIn, CheckInExtras
from sugarreset.services.store import PersistenceStore

router = APIRouter(prefix="/users/{user_id}/check-ins", tags=["check-ins"])

DEFAULT_RANGE_DAYS = 30


def _check_in_to_response(c: CheckIn) -> CheckInResponse:
    return CheckInResponse(
        day=str(c.day),
        sugar_free=c.sugar_free,
        grams_consumed=c.extras.grams_consumed,
        mood=c.extras.mood,
        craving_level=c.extras.craving_level,
        energy_level=c.extras.energy_level,
        sleep_quality=c.extras.sleep_quality,
        notes=c.extras.notes,
    )


@router.post(
    "",
    response_model=CheckInOutcomeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a daily check-in",
    responses={
        201: {"description": "Check-in stored and streak updated."},
        404: {"model": ErrorResponse, "description": "User not enrolled."},
        422: {"model": ErrorResponse, "description": "Future day or before plan start."},
        503: {"model": ErrorResponse, "description": "Storage failed; nothing changed."},
    },
)
def check_ins_record(
    user_id: str,
    payload: CheckInRequest,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    Store the day's outcome. Posting a day that already has a check-in
    replaces it completely (omitted optional fields are cleared).

    A first check-in for today updates the running streak; a backfill or a
    rewrite rebuilds the streak from the whole history, so filling a missed
    day can repair a broken streak.
    """
    extras = CheckInExtras(
        grams_consumed=payload.grams_consumed,
        mood=payload.mood,
        craving_level=payload.craving_level,
        energy_level=payload.energy_level,
        sleep_quality=payload.sleep_quality,
        notes=payload.notes,
    )
    ledger = CheckInLedger(store, clock, user_id)
    outcome = ledger.record_check_in(
        day=payload.day or clock.today(),
        sugar_free=payload.sugar_free,
        extras=extras,
    )
    return CheckInOutcomeResponse(
        check_in=_check_in_to_response(outcome.check_in),
        streak=streak_to_response(outcome.streak),
        new_achievements=[AchievementResponse.model_validate(a)
                          for a in outcome.new_achievements],
        recomputed=outcome.recomputed,
    )


@router.get(
    "",
    response_model=list[CheckInResponse],
    summary="Check-ins in a date range, newest first",
    responses={404: {"model": ErrorResponse, "description": "User not enrolled."}},
)
def check_ins_list(
    user_id: str,
    start: Optional[date] = Query(
        default=None,
        description=f"First day (inclusive). Defaults to {DEFAULT_RANGE_DAYS - 1} days before end.",
    ),
    end: Optional[date] = Query(
        default=None, description="Last day (inclusive). Defaults to today."
    ),
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    get_profile(store, user_id)
    last = end or clock.today()
    first = start or last - timedelta(days=DEFAULT_RANGE_DAYS - 1)
    if first > last:
        raise InvalidDateRangeError(start=first, end=last)
    ledger = CheckInLedger(store, clock, user_id)
    return [_check_in_to_response(c) for c in ledger.get_check_ins(first, last)]


@router.get(
    "/today",
    response_model=TodayStatusResponse,
    summary="Whether the user has checked in today",
    responses={404: {"model": ErrorResponse, "description": "User not enrolled."}},
)
def check_ins_today(
    user_id: str,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    get_profile(store, user_id)
    today = clock.today()
    check_in = CheckInLedger(store, clock, user_id).get_check_in(today)
    return TodayStatusResponse(
        day=str(today),
        has_checked_in=check_in is not None,
        check_in=_check_in_to_response(check_in) if check_in else None,
    )


@router.get(
    "/{day}",
    response_model=Optional[CheckInResponse],
    summary="The check-in for one day, or null",
    responses={404: {"model": ErrorResponse, "description": "User not enrolled."}},
)
def check_ins_get(
    user_id: str,
    day: date,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """A day with no check-in returns `null`, not an error."""
    get_profile(store, user_id)
    check_in = CheckInLedger(store, clock, user_id).get_check_in(day)
    return _check_in_to_response(check_in) if check_in else None
