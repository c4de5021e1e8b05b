"""
Plans router.

GET /plans
GET /plans/{plan_type}
GET /users/{user_id}/plan/today
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from sugarreset.core.clock import Clock
from sugarreset.core.deps import get_clock, get_store
from sugarreset.models.user import PlanType
from sugarreset.schemas.common import ErrorResponse
from sugarreset.schemas.plan import PlanResponse, PlanTodayResponse, WeeklyLimitResponse
from sugarreset.services.enrollment import get_profile
from sugarreset.services.plan_catalog import Plan, get_plan, list_plans
from sugarreset.services.plan_clock import current_limit, format_progress, today_guidance
from sugarreset.services.store import PersistenceStore

router = APIRouter(tags=["plans"])


def _plan_to_response(plan: Plan) -> PlanResponse:
    return PlanResponse(
        plan_type=plan.plan_type.value,
        name=plan.name,
        tagline=plan.tagline,
        description=plan.description,
        total_weeks=plan.total_weeks,
        weekly_limits=[WeeklyLimitResponse.model_validate(w) for w in plan.weekly_limits],
    )


@router.get("/plans", response_model=list[PlanResponse], summary="Both reduction plans")
def plans_list():
    return [_plan_to_response(p) for p in list_plans()]


@router.get(
    "/plans/{plan_type}",
    response_model=PlanResponse,
    summary="One plan with its weekly limits",
)
def plans_get(plan_type: PlanType):
    return _plan_to_response(get_plan(plan_type))


@router.get(
    "/users/{user_id}/plan/today",
    response_model=PlanTodayResponse,
    summary="Where the user is in their plan right now",
    responses={404: {"model": ErrorResponse, "description": "User not enrolled."}},
)
def plan_today(
    user_id: str,
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    Today's daily sugar limit, week number and a tip.

    Once the plan's final week has passed, `is_complete` is true and the
    limit stays at the final week's value (0 g).
    """
    profile = get_profile(store, user_id)
    plan = get_plan(profile.plan_type)
    now = clock.now()
    position = current_limit(plan, profile.plan_started_at, now)
    guidance = today_guidance(plan, profile.plan_started_at, now)
    return PlanTodayResponse(
        plan_type=plan.plan_type.value,
        plan_started_at=profile.plan_started_at.isoformat(),
        week_number=position.week_number,
        total_weeks=plan.total_weeks,
        is_complete=position.is_complete,
        progress=format_progress(plan, profile.plan_started_at, now),
        limit=WeeklyLimitResponse.model_validate(position.limit),
        tip=guidance.tip,
    )
