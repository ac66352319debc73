"""Root conftest for all tests.

Shared fixtures: sample plan specifications and an isolated in-memory
SQLite session factory per test.
"""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from runplan.db.models import Base
from runplan.plans.types import FitnessLevel, PlanSpecification, RunningGoal, Weekday

# 2025-01-06 is a Monday
MONDAY = date(2025, 1, 6)


@pytest.fixture
def plan_start() -> date:
    return MONDAY


@pytest.fixture
def beginner_spec() -> PlanSpecification:
    """Eight-week beginner fitness plan on Mon/Wed/Fri."""
    return PlanSpecification(
        goal=RunningGoal.BEGINNER_FITNESS,
        fitness_level=FitnessLevel.BEGINNER,
        start_date=MONDAY,
        end_date=date(2025, 3, 3),
        weekday_set=(Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY),
    )


@pytest.fixture
def race_spec() -> PlanSpecification:
    """Twelve-week half marathon plan for an advanced runner."""
    return PlanSpecification(
        goal=RunningGoal.RACE_TRAINING,
        fitness_level=FitnessLevel.ADVANCED,
        start_date=MONDAY,
        end_date=date(2025, 3, 31),
        weekday_set=(Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.SATURDAY),
        target_race_distance_km=21.1,
        target_race_time_sec=105 * 60,
    )


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database.

    StaticPool keeps the single connection alive so every session sees the
    same database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    try:
        yield factory
    finally:
        engine.dispose()
