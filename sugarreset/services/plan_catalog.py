"""
Plan catalog: the two sugar-reduction schedules.

Both plans run 13 weeks (roughly 90 days). Cold turkey holds 0 g from day
one; gradual starts at 50 g/day, steps down 5 g a week to 20 g, then drops
to 0 g at week 8 and holds there.

Public API
----------
get_plan(plan_type) -> Plan
list_plans()        -> list[Plan]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sugarreset.core.errors import UnknownPlanTypeError
from sugarreset.models.user import PlanType


@dataclass(frozen=True)
class WeeklyLimit:
    week_number: int
    daily_gram_limit: int
    title: str
    description: str


@dataclass(frozen=True)
class Plan:
    plan_type: PlanType
    name: str
    tagline: str
    description: str
    weekly_limits: tuple[WeeklyLimit, ...]
    tips: tuple[str, ...]

    @property
    def total_weeks(self) -> int:
        return len(self.weekly_limits)


def _weeks(*rows: tuple[int, str, str]) -> tuple[WeeklyLimit, ...]:
    return tuple(
        WeeklyLimit(week_number=i, daily_gram_limit=grams, title=title, description=desc)
        for i, (grams, title, desc) in enumerate(rows, start=1)
    )


GRADUAL_PLAN = Plan(
    plan_type=PlanType.gradual,
    name="Gradual Reduction",
    tagline="90 days to lasting change",
    description=(
        "Reduce sugar intake progressively over 13 weeks, starting at 50g and "
        "reaching zero at week 8. This science-backed approach minimizes cravings."
    ),
    weekly_limits=_weeks(
        (50, "Starting Point",
         "Begin at 50g/day. Most people consume 70-100g, so this is already a reduction."),
        (45, "First Step Down",
         "Down to 45g. Your body is beginning to adjust to less sugar."),
        (40, "Building Momentum",
         "Down to 40g. Cravings are starting to decrease noticeably."),
        (35, "Taste Bud Reset",
         "Your taste buds are becoming more sensitive to sweetness."),
        (30, "WHO Recommended",
         "At 30g, you're at the WHO recommended limit for added sugar."),
        (25, "Getting Close",
         "25g daily. Your dependency on sugar is breaking down."),
        (20, "Final Step Before Zero",
         "Just 20g left. Next week you make the jump to zero!"),
        (0, "Sugar-Free!",
         "Zero added sugar! From 20g to 0g. Now maintain for full neural rewiring."),
        (0, "Maintaining Zero",
         "Staying at zero. Your brain is rewiring its reward pathways."),
        (0, "New Normal",
         "Sugar-free is becoming automatic. Processed sugar seems too sweet."),
        (0, "Habit Locked In",
         "66+ days sugar-free - habit formation complete (Lally 2009)."),
        (0, "Almost Complete",
         "Neural pathways fully rewired. Sugar freedom is permanent."),
        (0, "90 Days Complete!",
         "90 days sugar-free! You've achieved lasting freedom. The habit is now automatic."),
    ),
    tips=(
        "Track your intake to stay within limits.",
        "Front-load your sugar allowance if needed.",
        "Choose whole fruits over processed sweets.",
        "Read labels - sugar hides in unexpected places.",
        "Each gram you save is progress.",
    ),
)

COLD_TURKEY_PLAN = Plan(
    plan_type=PlanType.cold_turkey,
    name="Cold Turkey",
    tagline="Complete commitment for 90 days",
    description=(
        "Zero added sugar from day one. This requires discipline but produces "
        "faster results. The 90-day journey rewires your brain completely."
    ),
    weekly_limits=_weeks(
        (0, "The Hardest Week",
         "Days 1-3 are when cravings peak. Your dopamine system is adjusting."),
        (0, "Taste Reset",
         "Cravings diminish. Natural foods start tasting sweeter."),
        (0, "New Normal", "Sugar-free is becoming your default state."),
        (0, "21-Day Mark", "Traditional habit formation milestone reached."),
        (0, "Mental Clarity", "Energy levels stabilize. Brain fog lifts."),
        (0, "Halfway There", "42 days complete! Sugar cravings rare now."),
        (0, "Steady State", "Your body has adapted to zero sugar."),
        (0, "Auto-Pilot", "Avoiding sugar is automatic now."),
        (0, "66-Day Mark", "Scientific habit formation complete (Lally 2009)."),
        (0, "Deep Rewiring", "Neural pathways firmly established."),
        (0, "Almost There", "Just 2 weeks to full 90-day reset."),
        (0, "Final Stretch", "The finish line is in sight!"),
        (0, "Champion", "90 days sugar-free! Your brain is fully rewired."),
    ),
    tips=(
        "Drink water when cravings hit.",
        "Go for a short walk to reset.",
        "Remember: cravings pass in 15-20 minutes.",
        "Focus on protein-rich snacks.",
        "Check nutrition labels carefully.",
    ),
)

_CATALOG: dict[PlanType, Plan] = {
    PlanType.cold_turkey: COLD_TURKEY_PLAN,
    PlanType.gradual: GRADUAL_PLAN,
}


def get_plan(plan_type: Union[PlanType, str]) -> Plan:
    """Look up a plan. Anything other than the two plan types is a caller bug."""
    try:
        return _CATALOG[PlanType(plan_type)]
    except ValueError:
        raise UnknownPlanTypeError(plan_type) from None


def list_plans() -> list[Plan]:
    return list(_CATALOG.values())
