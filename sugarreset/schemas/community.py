"""
Community schemas.

GET  /community/stats          → CommunitySummaryResponse
POST /community/stats/refresh  → CommunitySummaryResponse
GET  /community/leaderboard    → LeaderboardResponse
"""
from pydantic import BaseModel, ConfigDict, Field


class CommunitySummaryResponse(BaseModel):
    total_users: int
    active_users: int = Field(description="Users whose stats changed in the last 7 days.")
    average_streak: float
    average_health_score: int
    total_days_sugar_free: int = Field(
        description="Sum of every user's current streak."
    )
    top_streak: int
    top_health_score: int
    updated_at: str


class LeaderboardEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rank: int
    user_id: str
    health_score: int
    current_streak: int


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntryResponse]
