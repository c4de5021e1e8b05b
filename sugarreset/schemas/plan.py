"""
Plan schemas.

GET /plans                       → list[PlanResponse]
GET /plans/{plan_type}           → PlanResponse
GET /users/{user_id}/plan/today  → PlanTodayResponse
"""
from pydantic import BaseModel, ConfigDict, Field


class WeeklyLimitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week_number: int
    daily_gram_limit: int = Field(description="Added-sugar allowance per day, in grams.")
    title: str
    description: str


class PlanResponse(BaseModel):
    plan_type: str = Field(description='"cold_turkey" | "gradual"')
    name: str
    tagline: str
    description: str
    total_weeks: int
    weekly_limits: list[WeeklyLimitResponse]


class PlanTodayResponse(BaseModel):
    plan_type: str
    plan_started_at: str
    week_number: int = Field(description="Current week, clamped to the plan length.")
    total_weeks: int
    is_complete: bool = Field(
        description="True once the plan has ended and the user is in maintenance."
    )
    progress: str = Field(examples=["Week 3 of 13"])
    limit: WeeklyLimitResponse
    tip: str
