"""
Users router.

POST /users
GET  /users/{user_id}
PUT  /users/{user_id}/health-score
GET  /users/{user_id}/streak
GET  /users/{user_id}/achievements
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from sugarreset.core.clock import Clock
from sugarreset.core.deps import get_clock, get_store
from sugarreset.schemas.common import ErrorResponse
from sugarreset.schemas.user import (
    AchievementResponse,
    AchievementsResponse,
    EnrollRequest,
    HealthScoreRequest,
    StreakResponse,
    UserResponse,
)
from sugarreset.services import achievements
from sugarreset.services.check_in_ledger import CheckInLedger
from sugarreset.services.enrollment import enroll_user, get_profile, update_health_score
from sugarreset.services.records import StreakState, UserProfile
from sugarreset.services.store import PersistenceStore
from sugarreset.services.streak_calculator import effective

router = APIRouter(prefix="/users", tags=["users"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User not enrolled."}}


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def streak_to_response(s: StreakState) -> StreakResponse:
    return StreakResponse(
        current_streak=s.current_streak,
        longest_streak=s.longest_streak,
        total_days_sugar_free=s.total_days_sugar_free,
        last_check_in=str(s.last_check_in) if s.last_check_in else None,
    )


def _profile_to_response(p: UserProfile, clock: Clock) -> UserResponse:
    return UserResponse(
        user_id=p.user_id,
        plan_type=p.plan_type.value,
        plan_started_at=p.plan_started_at.isoformat(),
        health_score=p.health_score,
        streak=streak_to_response(effective(p.streak, clock.today())),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll a user on a plan",
    responses={409: {"model": ErrorResponse, "description": "User already enrolled."}},
)
def users_enroll(
    payload: EnrollRequest,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    profile = enroll_user(
        store, clock, payload.user_id, payload.plan_type, payload.plan_started_at
    )
    return _profile_to_response(profile, clock)


@router.get("/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
def users_get(
    user_id: str,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    return _profile_to_response(get_profile(store, user_id), clock)


@router.put(
    "/{user_id}/health-score",
    response_model=UserResponse,
    summary="Store the user's latest health score (0-100)",
    responses=_NOT_FOUND,
)
def users_health_score(
    user_id: str,
    payload: HealthScoreRequest,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    profile = update_health_score(store, clock, user_id, payload.health_score)
    return _profile_to_response(profile, clock)


@router.get(
    "/{user_id}/streak",
    response_model=StreakResponse,
    summary="Current streak, longest streak, total sugar-free days",
    responses=_NOT_FOUND,
)
def users_streak(
    user_id: str,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """A streak whose last logged day is older than yesterday reads as 0."""
    return streak_to_response(CheckInLedger(store, clock, user_id).streak())


@router.get(
    "/{user_id}/achievements",
    response_model=AchievementsResponse,
    summary="Unlocked and locked streak milestones",
    responses=_NOT_FOUND,
)
def users_achievements(
    user_id: str,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    streak = CheckInLedger(store, clock, user_id).streak()
    nxt = achievements.next_achievement(streak.current_streak)
    return AchievementsResponse(
        longest_streak=streak.longest_streak,
        unlocked=[AchievementResponse.model_validate(a)
                  for a in achievements.unlocked(streak.longest_streak)],
        locked=[AchievementResponse.model_validate(a)
                for a in achievements.locked(streak.longest_streak)],
        next=AchievementResponse.model_validate(nxt) if nxt else None,
    )
