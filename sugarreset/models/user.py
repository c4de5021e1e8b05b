from datetime import datetime, date
from sqlalchemy import Integer, String, DateTime, Date, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from sugarreset.db.base import Base


class PlanType(str, enum.Enum):
    cold_turkey = "cold_turkey"
    gradual = "gradual"


class User(Base):
    """
    An enrolled user: chosen plan plus the denormalized streak cache and
    the health score read by community aggregation.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    plan_type: Mapped[str] = mapped_column(
        Enum(PlanType, name="plan_type_enum"), nullable=False
    )
    # Naive local wall-clock time; week boundaries are measured from here.
    plan_started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_days_sugar_free: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_check_in: Mapped[date | None] = mapped_column(Date, nullable=True)

    health_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stats_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
