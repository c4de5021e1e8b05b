"""
User, streak and achievement schemas.
"""
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from sugarreset.models.user import PlanType


class EnrollRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    user_id: Annotated[str, Field(min_length=1, max_length=128)]
    plan_type: PlanType
    plan_started_at: Optional[datetime] = Field(
        default=None,
        description="When the plan started. Defaults to now.",
    )


class HealthScoreRequest(BaseModel):
    health_score: Annotated[int, Field(ge=0, le=100)]


class StreakResponse(BaseModel):
    current_streak: int
    longest_streak: int
    total_days_sugar_free: int
    last_check_in: Optional[str] = None


class UserResponse(BaseModel):
    user_id: str
    plan_type: str
    plan_started_at: str
    health_score: int
    streak: StreakResponse


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    emoji: str
    milestone: int
    description: str
    message: str


class AchievementsResponse(BaseModel):
    longest_streak: int
    unlocked: list[AchievementResponse]
    locked: list[AchievementResponse]
    next: Optional[AchievementResponse] = None
