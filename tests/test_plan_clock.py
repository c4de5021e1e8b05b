"""
Tests for the plan clock: elapsed weeks, clamped limits, progress text.
"""
from datetime import datetime, timedelta

import pytest

from sugarreset.services.plan_catalog import COLD_TURKEY_PLAN, GRADUAL_PLAN
from sugarreset.services.plan_clock import (
    MAINTENANCE_MESSAGE,
    current_limit,
    current_week_number,
    days_between,
    format_progress,
    today_guidance,
)

START = datetime(2026, 1, 1, 9, 0)


class TestDaysBetween:
    def test_elapsed_duration_not_calendar_days(self):
        late_start = datetime(2026, 1, 1, 23, 59)
        # Next calendar day, but less than 24h elapsed → still day 0.
        assert days_between(late_start, datetime(2026, 1, 2, 8, 0)) == 0
        assert days_between(late_start, datetime(2026, 1, 2, 23, 59)) == 1

    def test_before_start_is_negative(self):
        assert days_between(START, START - timedelta(hours=1)) == -1


class TestCurrentWeekNumber:
    def test_first_week(self):
        assert current_week_number(START, START) == 1
        assert current_week_number(START, START + timedelta(days=6, hours=23)) == 1

    def test_week_boundary(self):
        assert current_week_number(START, START + timedelta(days=7)) == 2
        assert current_week_number(START, START + timedelta(days=7) - timedelta(minutes=1)) == 1

    def test_never_below_one(self):
        assert current_week_number(START, START - timedelta(days=30)) == 1

    def test_non_decreasing_as_time_advances(self):
        weeks = [
            current_week_number(START, START + timedelta(hours=h))
            for h in range(-48, 24 * 120, 7)
        ]
        assert all(a <= b for a, b in zip(weeks, weeks[1:]))
        assert min(weeks) == 1


class TestCurrentLimit:
    def test_gradual_first_week(self):
        pos = current_limit(GRADUAL_PLAN, START, START + timedelta(days=2))
        assert pos.limit.daily_gram_limit == 50
        assert pos.week_number == 1
        assert pos.is_complete is False

    def test_gradual_week_eight_is_zero(self):
        pos = current_limit(GRADUAL_PLAN, START, START + timedelta(days=7 * 7))
        assert pos.week_number == 8
        assert pos.limit.daily_gram_limit == 0

    def test_last_week_is_not_complete(self):
        pos = current_limit(GRADUAL_PLAN, START, START + timedelta(days=7 * 12 + 6))
        assert pos.week_number == 13
        assert pos.is_complete is False

    @pytest.mark.parametrize("plan", [GRADUAL_PLAN, COLD_TURKEY_PLAN])
    def test_after_plan_ends_clamps_and_flags_maintenance(self, plan):
        pos = current_limit(plan, START, START + timedelta(days=7 * 20))
        assert pos.is_complete is True
        assert pos.week_number == 13
        assert pos.limit == plan.weekly_limits[-1]
        assert pos.limit.daily_gram_limit == 0


class TestFormatProgress:
    def test_in_progress(self):
        assert format_progress(GRADUAL_PLAN, START, START + timedelta(days=15)) == "Week 3 of 13"

    def test_maintenance(self):
        text = format_progress(COLD_TURKEY_PLAN, START, START + timedelta(days=91))
        assert text == MAINTENANCE_MESSAGE


class TestTodayGuidance:
    def test_fields_follow_current_limit(self):
        g = today_guidance(GRADUAL_PLAN, START, START + timedelta(days=8))
        assert g.limit_grams == 45
        assert g.title == "First Step Down"
        assert g.week_number == 2
        assert g.is_complete is False

    def test_tip_rotates_daily(self):
        day0 = today_guidance(COLD_TURKEY_PLAN, START, START)
        day1 = today_guidance(COLD_TURKEY_PLAN, START, START + timedelta(days=1))
        day5 = today_guidance(COLD_TURKEY_PLAN, START, START + timedelta(days=5))
        assert day0.tip == COLD_TURKEY_PLAN.tips[0]
        assert day1.tip == COLD_TURKEY_PLAN.tips[1]
        assert day5.tip == COLD_TURKEY_PLAN.tips[0]

    def test_before_start_uses_first_tip(self):
        g = today_guidance(GRADUAL_PLAN, START, START - timedelta(days=3))
        assert g.tip == GRADUAL_PLAN.tips[0]
        assert g.week_number == 1
