"""
Community router.

GET  /community/stats           latest stored summary (zeros before first run)
POST /community/stats/refresh   recompute the summary from all users
GET  /community/leaderboard     users ranked by health score
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from sugarreset.core.clock import Clock
from sugarreset.core.config import settings
from sugarreset.core.deps import get_clock, get_store
from sugarreset.schemas.common import ErrorResponse
from sugarreset.schemas.community import (
    CommunitySummaryResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
)
from sugarreset.services.records import CommunitySummary
from sugarreset.services.stats_aggregator import (
    get_community_summary,
    leaderboard,
    refresh_community_summary,
)
from sugarreset.services.store import PersistenceStore

router = APIRouter(prefix="/community", tags=["community"])


def _summary_to_response(s: CommunitySummary) -> CommunitySummaryResponse:
    return CommunitySummaryResponse(
        total_users=s.total_users,
        active_users=s.active_users,
        average_streak=s.average_streak,
        average_health_score=s.average_health_score,
        total_days_sugar_free=s.total_days_sugar_free,
        top_streak=s.top_streak,
        top_health_score=s.top_health_score,
        updated_at=s.updated_at.isoformat(),
    )


@router.get(
    "/stats",
    response_model=CommunitySummaryResponse,
    summary="Latest community summary",
)
def community_stats(
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """Returns an all-zero summary if no aggregation has run yet."""
    return _summary_to_response(get_community_summary(store, clock))


@router.post(
    "/stats/refresh",
    response_model=CommunitySummaryResponse,
    summary="Recompute and replace the community summary",
    responses={503: {"model": ErrorResponse, "description": "Storage failed."}},
)
def community_stats_refresh(
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    Aggregate every user's current streak and health score into one
    snapshot. Reads at most `AGGREGATION_READ_LIMIT` users per run.
    """
    return _summary_to_response(refresh_community_summary(store, clock))


@router.get(
    "/leaderboard",
    response_model=LeaderboardResponse,
    summary="Top users by health score",
)
def community_leaderboard(
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Page size."),
    store: PersistenceStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """Ties on health score go to the longer live streak."""
    entries = leaderboard(store, clock, limit or settings.LEADERBOARD_DEFAULT_LIMIT)
    return LeaderboardResponse(
        entries=[LeaderboardEntryResponse.model_validate(e) for e in entries],
    )
