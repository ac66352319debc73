"""Tests for plan record serialization and the SQL repository."""

import json
from datetime import UTC, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from runplan.plans.errors import PersistenceFailure
from runplan.plans.generator import build_training_plan
from runplan.services.persistence import (
    RECORD_FIELDS,
    SqlTrainingPlanRepository,
    plan_from_record,
    plan_to_record,
)

NOW = datetime(2025, 1, 1, 8, 0, tzinfo=UTC)


@pytest.fixture
def plan(race_spec):
    return build_training_plan(race_spec, user_id="user-1", plan_id="plan-1", now=NOW)


@pytest.fixture
def repository(session_factory) -> SqlTrainingPlanRepository:
    return SqlTrainingPlanRepository(session_factory)


def test_record_uses_snake_case_fields(plan):
    """Test that the record carries exactly the persisted field names."""
    record = plan_to_record(plan)

    assert tuple(record) == RECORD_FIELDS
    assert record["goal"] == "race_training"
    assert record["start_date"] == "2025-01-06"
    assert record["workout_days"] == ["tuesday", "wednesday", "saturday"]
    assert record["target_race_distance"] == 21.1
    assert record["workouts"][0]["workout_type"] == "easy"
    assert record["workouts"][0]["date"] == "2025-01-07"


def test_record_is_json_safe(plan):
    assert plan_from_record(json.loads(json.dumps(plan_to_record(plan)))) == plan


def test_save_and_get_round_trip(repository, plan):
    repository.save(plan)
    assert repository.get("plan-1", "user-1") == plan


def test_get_is_scoped_to_user(repository, plan):
    repository.save(plan)
    assert repository.get("plan-1", "someone-else") is None
    assert repository.get("missing", "user-1") is None


def test_list_for_user_orders_by_creation(repository, beginner_spec, race_spec):
    later = build_training_plan(beginner_spec, user_id="user-1", plan_id="later", now=datetime(2025, 2, 1, tzinfo=UTC))
    earlier = build_training_plan(race_spec, user_id="user-1", plan_id="earlier", now=NOW)
    other = build_training_plan(race_spec, user_id="user-2", plan_id="other", now=NOW)
    for item in (later, earlier, other):
        repository.save(item)

    assert [item.id for item in repository.list_for_user("user-1")] == ["earlier", "later"]
    assert [item.id for item in repository.list_for_user("user-2")] == ["other"]


def test_replace_overwrites_workouts(repository, plan):
    """Test that replace stores the whole new workout list."""
    repository.save(plan)
    edited = plan.with_workouts(plan.workouts[:5], updated_at=datetime(2025, 1, 2, tzinfo=UTC))

    repository.replace(edited)

    stored = repository.get("plan-1", "user-1")
    assert stored == edited
    assert len(stored.workouts) == 5


def test_replace_missing_plan_fails(repository, plan):
    with pytest.raises(PersistenceFailure):
        repository.replace(plan)


def test_delete(repository, plan):
    repository.save(plan)
    assert repository.delete("plan-1", "user-1") is True
    assert repository.delete("plan-1", "user-1") is False
    assert repository.get("plan-1", "user-1") is None


def test_duplicate_save_is_persistence_failure(repository, plan):
    repository.save(plan)
    with pytest.raises(PersistenceFailure):
        repository.save(plan)


def test_storage_error_is_persistence_failure(plan):
    """Test that database errors surface as PersistenceFailure."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    repository = SqlTrainingPlanRepository(sessionmaker(bind=engine))

    with pytest.raises(PersistenceFailure):
        repository.save(plan)
    with pytest.raises(PersistenceFailure):
        repository.list_for_user("user-1")
