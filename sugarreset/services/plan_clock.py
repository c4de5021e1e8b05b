"""
Plan clock: where a user is in their plan at a given instant.

Elapsed days are the elapsed *duration* floored to whole days, not a
calendar-date difference: a plan started at 23:59 is still on day 0 at
08:00 the next morning. Week numbers are 1-based and never below 1.

Every function is pure in (start, now); callers decide how often to ask.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sugarreset.services.plan_catalog import Plan, WeeklyLimit

MAINTENANCE_MESSAGE = "Plan complete! Maintaining sugar-free lifestyle."

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class PlanPosition:
    limit: WeeklyLimit   # clamped to the plan's final week
    week_number: int     # clamped to [1, total_weeks]
    is_complete: bool    # raw week is past the end of the plan


@dataclass(frozen=True)
class Guidance:
    limit_grams: int
    title: str
    tip: str
    week_number: int
    is_complete: bool


def days_between(start: datetime, now: datetime) -> int:
    return (now - start) // _ONE_DAY


def current_week_number(start: datetime, now: datetime) -> int:
    return max(1, days_between(start, now) // 7 + 1)


def current_limit(plan: Plan, start: datetime, now: datetime) -> PlanPosition:
    week = current_week_number(start, now)
    clamped = min(week, plan.total_weeks)
    return PlanPosition(
        limit=plan.weekly_limits[clamped - 1],
        week_number=clamped,
        is_complete=week > plan.total_weeks,
    )


def format_progress(plan: Plan, start: datetime, now: datetime) -> str:
    week = current_week_number(start, now)
    if week > plan.total_weeks:
        return MAINTENANCE_MESSAGE
    return f"Week {week} of {plan.total_weeks}"


def today_guidance(plan: Plan, start: datetime, now: datetime) -> Guidance:
    """Today's limit plus a tip. The tip rotates once per elapsed day."""
    position = current_limit(plan, start, now)
    day_index = max(0, days_between(start, now))
    return Guidance(
        limit_grams=position.limit.daily_gram_limit,
        title=position.limit.title,
        tip=plan.tips[day_index % len(plan.tips)],
        week_number=position.week_number,
        is_complete=position.is_complete,
    )
