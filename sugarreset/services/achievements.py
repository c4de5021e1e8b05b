"""
Streak milestones. An achievement unlocks the first time the current
streak reaches its milestone day count.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    emoji: str
    milestone: int   # streak days
    description: str
    message: str


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("day_1", "Fresh Start", "🌱", 1,
                "Complete your first day",
                "Every journey begins with a single step. You took yours today!"),
    Achievement("day_3", "Momentum Building", "💪", 3,
                "Reach 3 days sugar-free",
                "The first 3 days are the hardest. You're past the worst!"),
    Achievement("day_7", "One Week Warrior", "⭐", 7,
                "Complete a full week",
                "One week down! Your taste buds are already changing."),
    Achievement("day_14", "Two Week Champion", "🏆", 14,
                "Reach the 2-week milestone",
                "14 days! Your cravings are significantly reduced now."),
    Achievement("day_21", "Habit Former", "🧠", 21,
                "Complete 21 days",
                "21 days - the foundation of habit formation. Your brain is rewiring!"),
    Achievement("day_30", "One Month Master", "🎉", 30,
                "Achieve 1 month sugar-free",
                "A full month! You've proven this isn't temporary. You're transformed."),
    Achievement("day_60", "Diamond Strong", "💎", 60,
                "Reach 60 days of freedom",
                "60 days! Habits are now deeply ingrained. You're unstoppable."),
    Achievement("day_90", "Neural Rewired", "🚀", 90,
                "Complete the full 90-day journey",
                "90 DAYS! Your brain is fully rewired. Sugar addiction is broken. You're FREE!"),
)


def new_achievements(current_streak: int, previous_streak: int) -> list[Achievement]:
    """Milestones crossed by moving from previous_streak to current_streak."""
    return [
        a for a in ACHIEVEMENTS
        if current_streak >= a.milestone > previous_streak
    ]


def by_days(days: int) -> Optional[Achievement]:
    return next((a for a in ACHIEVEMENTS if a.milestone == days), None)


def unlocked(max_streak: int) -> list[Achievement]:
    return [a for a in ACHIEVEMENTS if a.milestone <= max_streak]


def locked(max_streak: int) -> list[Achievement]:
    return [a for a in ACHIEVEMENTS if a.milestone > max_streak]


def next_achievement(current_streak: int) -> Optional[Achievement]:
    return next((a for a in ACHIEVEMENTS if a.milestone > current_streak), None)
