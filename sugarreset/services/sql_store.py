"""
SQLAlchemy implementation of PersistenceStore.

Writes are flushed, never committed, until the service calls commit().
Any SQLAlchemyError is logged and re-raised as PersistenceError.
"""
from __future__ import annotations

import functools
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sugarreset.core.errors import PersistenceError
from sugarreset.models.check_in import CheckIn as CheckInRow
from sugarreset.models.community_summary import (
    CommunitySummary as CommunitySummaryRow,
    LATEST_KEY,
)
from sugarreset.models.user import PlanType, User
from sugarreset.services.records import (
    CheckIn,
    CheckInExtras,
    CommunitySummary,
    StreakState,
    UserProfile,
    UserStreakRecord,
)

logger = logging.getLogger(__name__)


def _wrap_errors(fn):
    """Translate driver/ORM failures into PersistenceError."""
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error("Store operation %s failed: %s", fn.__name__, exc)
            raise PersistenceError(fn.__name__) from exc
    return wrapper


# ---------------------------------------------------------------------------
# Row -> record helpers
# ---------------------------------------------------------------------------

def _check_in_record(row: CheckInRow) -> CheckIn:
    return CheckIn(
        day=row.day,
        sugar_free=row.sugar_free,
        extras=CheckInExtras(
            grams_consumed=row.grams_consumed,
            mood=row.mood,
            craving_level=row.craving_level,
            energy_level=row.energy_level,
            sleep_quality=row.sleep_quality,
            notes=row.notes,
        ),
    )


def _profile_record(row: User) -> UserProfile:
    return UserProfile(
        user_id=row.id,
        plan_type=PlanType(row.plan_type),
        plan_started_at=row.plan_started_at,
        streak=StreakState(
            current_streak=row.current_streak,
            longest_streak=row.longest_streak,
            total_days_sugar_free=row.total_days_sugar_free,
            last_check_in=row.last_check_in,
        ),
        health_score=row.health_score,
        stats_updated_at=row.stats_updated_at,
    )


def _streak_record(row: User) -> UserStreakRecord:
    return UserStreakRecord(
        user_id=row.id,
        current_streak=row.current_streak or 0,
        health_score=row.health_score or 0,
        updated_at=row.stats_updated_at,
        last_check_in=row.last_check_in,
    )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class SqlAlchemyStore:
    def __init__(self, db: Session):
        self.db = db

    # --- users -------------------------------------------------------------

    def _user_row(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    @_wrap_errors
    def get_user(self, user_id: str) -> Optional[UserProfile]:
        row = self._user_row(user_id)
        return _profile_record(row) if row is not None else None

    @_wrap_errors
    def add_user(self, profile: UserProfile) -> None:
        self.db.add(User(
            id=profile.user_id,
            plan_type=profile.plan_type,
            plan_started_at=profile.plan_started_at,
            current_streak=profile.streak.current_streak,
            longest_streak=profile.streak.longest_streak,
            total_days_sugar_free=profile.streak.total_days_sugar_free,
            last_check_in=profile.streak.last_check_in,
            health_score=profile.health_score,
            stats_updated_at=profile.stats_updated_at,
        ))
        self.db.flush()

    @_wrap_errors
    def save_streak(self, user_id: str, streak: StreakState, updated_at: datetime) -> None:
        row = self._user_row(user_id)
        if row is None:
            raise PersistenceError("save_streak")
        row.current_streak = streak.current_streak
        row.longest_streak = streak.longest_streak
        row.total_days_sugar_free = streak.total_days_sugar_free
        row.last_check_in = streak.last_check_in
        row.stats_updated_at = updated_at
        self.db.flush()

    @_wrap_errors
    def set_health_score(self, user_id: str, score: int, updated_at: datetime) -> None:
        row = self._user_row(user_id)
        if row is None:
            raise PersistenceError("set_health_score")
        row.health_score = score
        row.stats_updated_at = updated_at
        self.db.flush()

    # --- check-ins ---------------------------------------------------------

    def _check_in_row(self, user_id: str, day: date) -> Optional[CheckInRow]:
        return (
            self.db.query(CheckInRow)
            .filter(CheckInRow.user_id == user_id, CheckInRow.day == day)
            .first()
        )

    @_wrap_errors
    def get_check_in(self, user_id: str, day: date) -> Optional[CheckIn]:
        row = self._check_in_row(user_id, day)
        return _check_in_record(row) if row is not None else None

    @_wrap_errors
    def put_check_in(self, user_id: str, check_in: CheckIn) -> None:
        row = self._check_in_row(user_id, check_in.day)
        if row is None:
            row = CheckInRow(user_id=user_id, day=check_in.day)
            self.db.add(row)
        # Whole-record overwrite: omitted extras become NULL.
        extras = check_in.extras
        row.sugar_free = check_in.sugar_free
        row.grams_consumed = extras.grams_consumed
        row.mood = extras.mood
        row.craving_level = extras.craving_level
        row.energy_level = extras.energy_level
        row.sleep_quality = extras.sleep_quality
        row.notes = extras.notes
        self.db.flush()

    @_wrap_errors
    def list_check_ins(
        self, user_id: str, start: Optional[date], end: Optional[date]
    ) -> list[CheckIn]:
        q = self.db.query(CheckInRow).filter(CheckInRow.user_id == user_id)
        if start is not None:
            q = q.filter(CheckInRow.day >= start)
        if end is not None:
            q = q.filter(CheckInRow.day <= end)
        return [_check_in_record(r) for r in q.order_by(CheckInRow.day.desc()).all()]

    # --- community ---------------------------------------------------------

    @_wrap_errors
    def get_all_user_streak_records(self, limit: int) -> list[UserStreakRecord]:
        rows = self.db.query(User).order_by(User.id).limit(limit).all()
        return [_streak_record(r) for r in rows]

    @_wrap_errors
    def top_users_by_health_score(self, limit: int) -> list[UserStreakRecord]:
        rows = (
            self.db.query(User)
            .order_by(User.health_score.desc(), User.current_streak.desc(), User.id)
            .limit(limit)
            .all()
        )
        return [_streak_record(r) for r in rows]

    @_wrap_errors
    def get_community_summary(self) -> Optional[CommunitySummary]:
        row = self.db.get(CommunitySummaryRow, LATEST_KEY)
        if row is None:
            return None
        return CommunitySummary(
            total_users=row.total_users,
            active_users=row.active_users,
            average_streak=float(row.average_streak),
            average_health_score=row.average_health_score,
            total_days_sugar_free=row.total_days_sugar_free,
            top_streak=row.top_streak,
            top_health_score=row.top_health_score,
            updated_at=row.updated_at,
        )

    @_wrap_errors
    def replace_community_summary(self, summary: CommunitySummary) -> None:
        # merge() writes every column of the "latest" row in one statement.
        self.db.merge(CommunitySummaryRow(
            key=LATEST_KEY,
            total_users=summary.total_users,
            active_users=summary.active_users,
            average_streak=summary.average_streak,
            average_health_score=summary.average_health_score,
            total_days_sugar_free=summary.total_days_sugar_free,
            top_streak=summary.top_streak,
            top_health_score=summary.top_health_score,
            updated_at=summary.updated_at,
        ))
        self.db.flush()

    # --- unit of work ------------------------------------------------------

    @_wrap_errors
    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
