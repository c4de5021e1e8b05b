"""
Streak calculator: derives StreakState from check-in history.

Rules
-----
- total_days_sugar_free: every sugar-free check-in ever logged.
- current_streak: consecutive sugar-free days ending at the most recent
  logged day. Zero if that day had sugar, or if it is older than yesterday
  (an unlogged day that has fully elapsed breaks the streak).
- longest_streak: the longest run of consecutive sugar-free days.

Two ways to get there:
  compute(): recompute from the full history (backfills, overwrites)
  advance(): running-counter update for a brand-new check-in for today
For a new today check-in both give the same answer.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable

from sugarreset.services.records import CheckIn, StreakState

_ONE_DAY = timedelta(days=1)


def _is_live(last_day: date | None, today: date) -> bool:
    """A streak ending on last_day still counts if it ended today or yesterday."""
    return last_day is not None and last_day >= today - _ONE_DAY


def longest_run(check_ins: Iterable[CheckIn]) -> int:
    sugar_free_days = sorted(c.day for c in check_ins if c.sugar_free)
    best = run = 0
    prev: date | None = None
    for day in sugar_free_days:
        run = run + 1 if prev is not None and day - prev == _ONE_DAY else 1
        best = max(best, run)
        prev = day
    return best


def compute(check_ins: Iterable[CheckIn], today: date) -> StreakState:
    """Recompute the whole StreakState from a ledger snapshot."""
    by_day = {c.day: c for c in check_ins}
    if not by_day:
        return StreakState()

    last_day = max(by_day)
    current = 0
    if _is_live(last_day, today):
        day = last_day
        while day in by_day and by_day[day].sugar_free:
            current += 1
            day -= _ONE_DAY

    return StreakState(
        current_streak=current,
        longest_streak=longest_run(by_day.values()),
        total_days_sugar_free=sum(1 for c in by_day.values() if c.sugar_free),
        last_check_in=last_day,
    )


def advance(state: StreakState, check_in: CheckIn, today: date) -> StreakState:
    """Apply a first-time check-in for `today` to a running StreakState."""
    if not check_in.sugar_free:
        return replace(state, current_streak=0, last_check_in=today)

    if state.last_check_in == today:
        # Already counted today.
        return state

    if _is_live(state.last_check_in, today) or state.current_streak == 0:
        current = state.current_streak + 1
    else:
        current = 1

    return StreakState(
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        total_days_sugar_free=state.total_days_sugar_free + 1,
        last_check_in=today,
    )


def effective(state: StreakState, today: date) -> StreakState:
    """The stored state as of `today`: a stale current streak reads as 0."""
    if state.current_streak and not _is_live(state.last_check_in, today):
        return replace(state, current_streak=0)
    return state
