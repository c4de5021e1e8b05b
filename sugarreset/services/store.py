"""
PersistenceStore: the storage collaborator the domain services depend on.

Writes are staged: put_check_in / save_streak / set_health_score /
add_user / replace_community_summary do not become durable until the
service calls commit(). On failure the service calls rollback(), so a
check-in and its streak update land together or not at all.

Implementations raise PersistenceError when the backend fails. The
services never retry.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from sugarreset.services.records import (
    CheckIn,
    CommunitySummary,
    StreakState,
    UserProfile,
    UserStreakRecord,
)


class PersistenceStore(Protocol):

    # --- users -------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[UserProfile]: ...

    def add_user(self, profile: UserProfile) -> None: ...

    def save_streak(self, user_id: str, streak: StreakState, updated_at: datetime) -> None: ...

    def set_health_score(self, user_id: str, score: int, updated_at: datetime) -> None: ...

    # --- check-ins ---------------------------------------------------------

    def get_check_in(self, user_id: str, day: date) -> Optional[CheckIn]: ...

    def put_check_in(self, user_id: str, check_in: CheckIn) -> None: ...

    def list_check_ins(
        self, user_id: str, start: Optional[date], end: Optional[date]
    ) -> list[CheckIn]:
        """Inclusive range, newest first. None leaves that side unbounded."""
        ...

    # --- community ---------------------------------------------------------

    def get_all_user_streak_records(self, limit: int) -> list[UserStreakRecord]: ...

    def top_users_by_health_score(self, limit: int) -> list[UserStreakRecord]: ...

    def get_community_summary(self) -> Optional[CommunitySummary]: ...

    def replace_community_summary(self, summary: CommunitySummary) -> None: ...

    # --- unit of work ------------------------------------------------------

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
