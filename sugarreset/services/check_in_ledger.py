"""
Check-in ledger: one check-in per user per calendar day.

Public API
----------
CheckInLedger(store, clock, user_id)
    .record_check_in(day, sugar_free, extras)  -> CheckInOutcome
    .get_check_in(day)                          -> CheckIn | None
    .get_check_ins(start, end)                  -> list[CheckIn]  (newest first)
    .has_checked_in_today()                     -> bool
    .streak()                                   -> StreakState

Writing a day that already has a check-in replaces it completely; extras
omitted on the second write are cleared, not merged. The check-in and the
user's streak cache are committed together or rolled back together.

Concurrent writes to the same day from two devices are last-write-wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from sugarreset.core.clock import Clock
from sugarreset.core.errors import (
    CheckInBeforePlanStartError,
    FutureCheckInError,
    PersistenceError,
    UserNotFoundError,
)
from sugarreset.services import achievements, streak_calculator
from sugarreset.services.achievements import Achievement
from sugarreset.services.records import CheckIn, CheckInExtras, StreakState, UserProfile
from sugarreset.services.store import PersistenceStore

logger = logging.getLogger(__name__)


@dataclass
class CheckInOutcome:
    check_in: CheckIn
    streak: StreakState
    new_achievements: list[Achievement]
    recomputed: bool   # True if the streak was rebuilt from full history


class CheckInLedger:
    def __init__(self, store: PersistenceStore, clock: Clock, user_id: str):
        self.store = store
        self.clock = clock
        self.user_id = user_id

    def _profile(self) -> UserProfile:
        profile = self.store.get_user(self.user_id)
        if profile is None:
            raise UserNotFoundError(self.user_id)
        return profile

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def record_check_in(
        self,
        day: date,
        sugar_free: bool,
        extras: Optional[CheckInExtras] = None,
    ) -> CheckInOutcome:
        profile = self._profile()
        today = self.clock.today()
        plan_start = profile.plan_started_at.date()

        if day > today:
            raise FutureCheckInError(day=day, today=today)
        if day < plan_start:
            raise CheckInBeforePlanStartError(day=day, plan_start=plan_start)

        check_in = CheckIn(day=day, sugar_free=sugar_free, extras=extras or CheckInExtras())
        previous = streak_calculator.effective(profile.streak, today)

        try:
            existing = self.store.get_check_in(self.user_id, day)
            self.store.put_check_in(self.user_id, check_in)

            recomputed = day != today or existing is not None
            if recomputed:
                streak = self._recompute(profile, today)
            else:
                streak = streak_calculator.advance(profile.streak, check_in, today)

            self.store.save_streak(self.user_id, streak, self.clock.now())
            self.store.commit()
        except PersistenceError:
            self.store.rollback()
            logger.warning(
                "Check-in for user=%s day=%s rolled back", self.user_id, day
            )
            raise

        logger.info(
            "Check-in recorded user=%s day=%s sugar_free=%s current=%d longest=%d%s",
            self.user_id, day, sugar_free, streak.current_streak,
            streak.longest_streak, " (recomputed)" if recomputed else "",
        )
        return CheckInOutcome(
            check_in=check_in,
            streak=streak,
            new_achievements=achievements.new_achievements(
                streak.current_streak, previous.current_streak
            ),
            recomputed=recomputed,
        )

    def _recompute(self, profile: UserProfile, today: date) -> StreakState:
        """Rebuild the streak from one read of the whole ledger."""
        history = self.store.list_check_ins(
            self.user_id, profile.plan_started_at.date(), today
        )
        fresh = streak_calculator.compute(history, today)
        # Longest streak never goes down, even if a past day is rewritten as a miss.
        return replace(
            fresh,
            longest_streak=max(fresh.longest_streak, profile.streak.longest_streak),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_check_in(self, day: date) -> Optional[CheckIn]:
        return self.store.get_check_in(self.user_id, day)

    def get_check_ins(self, start: date, end: date) -> list[CheckIn]:
        return self.store.list_check_ins(self.user_id, start, end)

    def has_checked_in_today(self) -> bool:
        return self.get_check_in(self.clock.today()) is not None

    def streak(self) -> StreakState:
        return streak_calculator.effective(self._profile().streak, self.clock.today())
