"""
Tests for the plan catalog: the two weekly schedules and lookup.
"""
import pytest

from sugarreset.core.errors import UnknownPlanTypeError
from sugarreset.models.user import PlanType
from sugarreset.services.plan_catalog import (
    COLD_TURKEY_PLAN,
    GRADUAL_PLAN,
    get_plan,
    list_plans,
)


class TestGetPlan:
    def test_lookup_by_enum(self):
        assert get_plan(PlanType.gradual) is GRADUAL_PLAN
        assert get_plan(PlanType.cold_turkey) is COLD_TURKEY_PLAN

    def test_lookup_by_string(self):
        assert get_plan("gradual") is GRADUAL_PLAN
        assert get_plan("cold_turkey") is COLD_TURKEY_PLAN

    @pytest.mark.parametrize("bad", ["slow", "", "GRADUAL", None, 3])
    def test_unknown_plan_type_raises(self, bad):
        with pytest.raises(UnknownPlanTypeError) as exc:
            get_plan(bad)
        assert exc.value.code == "UNKNOWN_PLAN_TYPE"

    def test_list_plans_returns_both(self):
        assert {p.plan_type for p in list_plans()} == {PlanType.gradual, PlanType.cold_turkey}


class TestSchedules:
    @pytest.mark.parametrize("plan", [GRADUAL_PLAN, COLD_TURKEY_PLAN])
    def test_week_numbers_contiguous_from_one(self, plan):
        assert [w.week_number for w in plan.weekly_limits] == list(range(1, 14))
        assert plan.total_weeks == 13

    def test_cold_turkey_is_zero_every_week(self):
        assert all(w.daily_gram_limit == 0 for w in COLD_TURKEY_PLAN.weekly_limits)

    def test_gradual_exact_limits(self):
        limits = [w.daily_gram_limit for w in GRADUAL_PLAN.weekly_limits]
        assert limits == [50, 45, 40, 35, 30, 25, 20, 0, 0, 0, 0, 0, 0]

    def test_gradual_non_increasing_to_week_8_then_zero(self):
        limits = [w.daily_gram_limit for w in GRADUAL_PLAN.weekly_limits]
        first_eight = limits[:8]
        assert all(a >= b for a, b in zip(first_eight, first_eight[1:]))
        assert all(g == 0 for g in limits[7:])

    @pytest.mark.parametrize("plan", [GRADUAL_PLAN, COLD_TURKEY_PLAN])
    def test_every_plan_has_tips(self, plan):
        assert len(plan.tips) == 5
