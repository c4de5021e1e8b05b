"""
Community stats: reduce every user's streak and health score into the
single shared CommunitySummary.

Public API
----------
aggregate(records, now)                  -> CommunitySummary   (pure)
refresh_community_summary(store, clock)  -> CommunitySummary   (read, reduce, replace)
get_community_summary(store, clock)      -> CommunitySummary   (zeros if never run)
leaderboard(store, clock, limit)         -> list[LeaderboardEntry]

The summary is a best-effort snapshot. Each refresh reads at most
AGGREGATION_READ_LIMIT users and replaces the stored row in one write;
two refreshes are assumed never to overlap.

Stored current streaks are read through the same gap rule as a user's own
streak: a user whose last logged day is before yesterday counts as 0.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from sugarreset.core.clock import Clock
from sugarreset.core.config import settings
from sugarreset.core.errors import PersistenceError
from sugarreset.services import streak_calculator
from sugarreset.services.records import (
    CommunitySummary,
    LeaderboardEntry,
    StreakState,
    UserStreakRecord,
)
from sugarreset.services.store import PersistenceStore

logger = logging.getLogger(__name__)


def _round(value: Decimal, quantum: str) -> Decimal:
    return value.quantize(Decimal(quantum), rounding=ROUND_HALF_UP)


def as_of(record: UserStreakRecord, today: date) -> UserStreakRecord:
    """The record with its current streak read through the gap rule."""
    streak = streak_calculator.effective(
        StreakState(
            current_streak=record.current_streak,
            last_check_in=record.last_check_in,
        ),
        today,
    )
    if streak.current_streak == record.current_streak:
        return record
    return replace(record, current_streak=streak.current_streak)


def empty_summary(now: datetime) -> CommunitySummary:
    return CommunitySummary(
        total_users=0,
        active_users=0,
        average_streak=0.0,
        average_health_score=0,
        total_days_sugar_free=0,
        top_streak=0,
        top_health_score=0,
        updated_at=now,
    )


def aggregate(
    records: Sequence[UserStreakRecord],
    now: datetime,
    active_window_days: Optional[int] = None,
) -> CommunitySummary:
    total_users = len(records)
    if total_users == 0:
        return empty_summary(now)

    window = (
        settings.ACTIVE_WINDOW_DAYS if active_window_days is None else active_window_days
    )
    active_since = now - timedelta(days=window)

    streaks = [r.current_streak for r in records]
    scores = [r.health_score for r in records]
    active = sum(
        1 for r in records
        if r.updated_at is not None and r.updated_at > active_since
    )

    average_streak = _round(Decimal(sum(streaks)) / total_users, "0.1")
    average_score = _round(Decimal(sum(scores)) / total_users, "1")

    return CommunitySummary(
        total_users=total_users,
        active_users=active,
        average_streak=float(average_streak),
        average_health_score=int(average_score),
        # Sum of *current* streaks, kept as the mobile client has always shown it.
        total_days_sugar_free=sum(streaks),
        top_streak=max(streaks),
        top_health_score=max(scores),
        updated_at=now,
    )


def refresh_community_summary(store: PersistenceStore, clock: Clock) -> CommunitySummary:
    records = store.get_all_user_streak_records(settings.AGGREGATION_READ_LIMIT)
    if len(records) >= settings.AGGREGATION_READ_LIMIT:
        logger.warning(
            "Community aggregation hit the read limit of %d users; summary is partial",
            settings.AGGREGATION_READ_LIMIT,
        )

    now = clock.now()
    summary = aggregate([as_of(r, now.date()) for r in records], now)
    try:
        store.replace_community_summary(summary)
        store.commit()
    except PersistenceError:
        store.rollback()
        raise

    logger.info(
        "Community summary refreshed: users=%d active=%d avg_streak=%.1f",
        summary.total_users, summary.active_users, summary.average_streak,
    )
    return summary


def get_community_summary(store: PersistenceStore, clock: Clock) -> CommunitySummary:
    return store.get_community_summary() or empty_summary(clock.now())


def leaderboard(
    store: PersistenceStore, clock: Clock, limit: int
) -> list[LeaderboardEntry]:
    today = clock.today()
    records = [as_of(r, today) for r in store.top_users_by_health_score(limit)]
    # The store orders ties by the stored streak; re-rank on the live one.
    records.sort(key=lambda r: (-r.health_score, -r.current_streak, r.user_id))
    return [
        LeaderboardEntry(
            rank=i,
            user_id=r.user_id,
            health_score=r.health_score,
            current_streak=r.current_streak,
        )
        for i, r in enumerate(records, start=1)
    ]
