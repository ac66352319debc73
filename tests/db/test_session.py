"""Tests for database session handling."""

from datetime import UTC, date, datetime

import pytest
from sqlalchemy import inspect, select

from runplan.db.models import TrainingPlanRecord
from runplan.db.session import build_engine, session_scope


def _record(plan_id: str = "plan-1") -> TrainingPlanRecord:
    return TrainingPlanRecord(
        id=plan_id,
        user_id="user-1",
        name="Beginner Fitness Plan",
        goal="beginner_fitness",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 3, 3),
        fitness_level="beginner",
        workout_days=["monday", "wednesday"],
        preferred_time="morning",
        workouts=[],
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
        updated_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


def test_session_scope_commits(session_factory):
    with session_scope(session_factory) as session:
        session.add(_record())

    with session_scope(session_factory) as session:
        stored = session.execute(select(TrainingPlanRecord)).scalar_one()
        assert stored.workout_days == ["monday", "wednesday"]


def test_session_scope_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        with session_scope(session_factory) as session:
            session.add(_record())
            session.flush()
            raise RuntimeError("boom")

    with session_scope(session_factory) as session:
        assert session.execute(select(TrainingPlanRecord)).first() is None


def test_training_plans_table_columns(session_factory):
    with session_scope(session_factory) as session:
        columns = {column["name"] for column in inspect(session.get_bind()).get_columns("training_plans")}
    assert {"id", "user_id", "workout_days", "preferred_time", "current_5k_time", "target_race_time"} <= columns


def test_build_engine_for_sqlite():
    engine = build_engine("sqlite://")
    assert engine.dialect.name == "sqlite"
    engine.dispose()
