"""
CommunitySummary: the single shared aggregate snapshot.

Exactly one row (key "latest"). Every aggregation run overwrites all
columns in one statement; nothing increments fields in place.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Numeric, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from sugarreset.db.base import Base

LATEST_KEY = "latest"


class CommunitySummary(Base):
    __tablename__ = "community_summaries"

    key: Mapped[str] = mapped_column(String(32), primary_key=True, default=LATEST_KEY)
    total_users: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active_users: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_streak: Mapped[float] = mapped_column(
        Numeric(10, 1, asdecimal=False), nullable=False, default=0
    )
    average_health_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_days_sugar_free: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    top_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    top_health_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
