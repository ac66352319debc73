from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, Float, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""


class TrainingPlanRecord(Base):
    """Persisted training plan.

    Column names are the persistence wire format (snake_case). Workouts
    and workout days are stored as JSON lists; an edit replaces the whole
    workouts list.
    """

    __tablename__ = "training_plans"

    id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    goal: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    fitness_level: Mapped[str] = mapped_column(String, nullable=False)
    workout_days: Mapped[list] = mapped_column(JSON, nullable=False)
    preferred_time: Mapped[str] = mapped_column(String, nullable=False)
    workouts: Mapped[list] = mapped_column(JSON, nullable=False)
    current_5k_time: Mapped[float | None] = mapped_column(Float, nullable=True)  # seconds
    target_race_distance: Mapped[float | None] = mapped_column(Float, nullable=True)  # km
    target_race_time: Mapped[float | None] = mapped_column(Float, nullable=True)  # seconds
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_training_plans_user_created", "user_id", "created_at"),
    )
