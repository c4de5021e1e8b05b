"""
Check-in schemas.

POST /users/{user_id}/check-ins        → CheckInRequest → CheckInOutcomeResponse
GET  /users/{user_id}/check-ins        → list[CheckInResponse]
GET  /users/{user_id}/check-ins/today  → TodayStatusResponse
GET  /users/{user_id}/check-ins/{day}  → CheckInResponse
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from sugarreset.schemas.user import AchievementResponse, StreakResponse

Scale = Annotated[int, Field(ge=1, le=5)]


class CheckInRequest(BaseModel):
    """A day's outcome. Re-posting a day replaces the previous check-in."""
    day: Optional[date] = Field(
        default=None,
        description="Day being logged. Defaults to today; past days backfill.",
        examples=["2026-10-17"],
    )
    sugar_free: bool
    grams_consumed: Optional[Annotated[int, Field(ge=0)]] = None
    mood: Optional[Scale] = Field(default=None, description="1 = poor, 5 = excellent")
    craving_level: Optional[Scale] = Field(default=None, description="1 = none, 5 = intense")
    energy_level: Optional[Scale] = None
    sleep_quality: Optional[Scale] = None
    notes: Optional[Annotated[str, Field(max_length=200)]] = None

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CheckInResponse(BaseModel):
    day: str
    sugar_free: bool
    grams_consumed: Optional[int] = None
    mood: Optional[int] = None
    craving_level: Optional[int] = None
    energy_level: Optional[int] = None
    sleep_quality: Optional[int] = None
    notes: Optional[str] = None


class CheckInOutcomeResponse(BaseModel):
    check_in: CheckInResponse
    streak: StreakResponse
    new_achievements: list[AchievementResponse]
    recomputed: bool = Field(
        description="True if the streak was rebuilt from the full history (backfill or rewrite)."
    )


class TodayStatusResponse(BaseModel):
    day: str
    has_checked_in: bool
    check_in: Optional[CheckInResponse] = None
