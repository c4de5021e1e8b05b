"""
Domain records shared by the service layer.

Plain dataclasses: no ORM, no Pydantic. The store converts rows to these
so the streak and stats logic can run against any PersistenceStore.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from sugarreset.core.errors import InvalidCheckInError
from sugarreset.models.user import PlanType

NOTES_MAX_LENGTH = 200
_SCALE_FIELDS = ("mood", "craving_level", "energy_level", "sleep_quality")


@dataclass(frozen=True)
class CheckInExtras:
    """Optional context for a check-in. Replaced as a whole on rewrite."""
    grams_consumed: Optional[int] = None
    mood: Optional[int] = None            # 1 = poor, 5 = excellent
    craving_level: Optional[int] = None   # 1 = none, 5 = intense
    energy_level: Optional[int] = None
    sleep_quality: Optional[int] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if self.grams_consumed is not None and self.grams_consumed < 0:
            raise InvalidCheckInError(
                "grams_consumed", "grams_consumed must be a non-negative integer."
            )
        for name in _SCALE_FIELDS:
            value = getattr(self, name)
            if value is not None and not 1 <= value <= 5:
                raise InvalidCheckInError(name, f"{name} must be between 1 and 5.")
        if self.notes is not None and len(self.notes) > NOTES_MAX_LENGTH:
            raise InvalidCheckInError(
                "notes", f"notes must be at most {NOTES_MAX_LENGTH} characters."
            )


@dataclass(frozen=True)
class CheckIn:
    day: date
    sugar_free: bool
    extras: CheckInExtras = field(default_factory=CheckInExtras)


@dataclass(frozen=True)
class StreakState:
    current_streak: int = 0
    longest_streak: int = 0
    total_days_sugar_free: int = 0
    last_check_in: Optional[date] = None


@dataclass(frozen=True)
class UserProfile:
    user_id: str
    plan_type: PlanType
    plan_started_at: datetime
    streak: StreakState = field(default_factory=StreakState)
    health_score: int = 0
    stats_updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class UserStreakRecord:
    """Projection of a user read by community aggregation."""
    user_id: str
    current_streak: int
    health_score: int
    updated_at: Optional[datetime]
    last_check_in: Optional[date] = None


@dataclass(frozen=True)
class CommunitySummary:
    total_users: int
    active_users: int
    average_streak: float
    average_health_score: int
    total_days_sugar_free: int
    top_streak: int
    top_health_score: int
    updated_at: datetime


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user_id: str
    health_score: int
    current_streak: int
