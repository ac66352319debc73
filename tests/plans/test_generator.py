"""Tests for plan specification validation and plan generation."""

import json
from datetime import UTC, date, datetime, timedelta

import pytest

from runplan.plans.errors import PlanValidationError
from runplan.plans.generator import build_training_plan, build_weekly_intents, generate_workouts
from runplan.plans.types import FitnessLevel, PlanSpecification, RunningGoal, Weekday, WorkoutType
from runplan.plans.validators import validate_plan_specification


def _spec(**overrides) -> PlanSpecification:
    values = {
        "goal": RunningGoal.BEGINNER_FITNESS,
        "fitness_level": FitnessLevel.BEGINNER,
        "start_date": date(2025, 1, 6),
        "end_date": date(2025, 3, 3),
        "weekday_set": (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY),
    }
    values.update(overrides)
    return PlanSpecification(**values)


def test_valid_specification_returns_total_weeks(beginner_spec):
    assert validate_plan_specification(beginner_spec) == 8


def test_end_before_start_is_rejected():
    """Test that an end date on or before the start date is rejected."""
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan_specification(_spec(end_date=date(2025, 1, 6)))
    assert exc_info.value.code == "INVALID_PLAN_SPECIFICATION"
    assert any("must be after start_date" in detail for detail in exc_info.value.details)


def test_empty_weekday_set_is_rejected():
    """Test that a plan without training days is rejected."""
    with pytest.raises(PlanValidationError) as exc_info:
        generate_workouts(_spec(weekday_set=()))
    assert any("weekday_set" in detail for detail in exc_info.value.details)


def test_plan_shorter_than_a_week_is_rejected():
    """Test that a span with no whole week is rejected instead of returning nothing."""
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan_specification(_spec(end_date=date(2025, 1, 11)))
    assert any("whole week" in detail for detail in exc_info.value.details)


def test_race_training_requires_race_details():
    """Test that race training without a distance and time is rejected."""
    with pytest.raises(PlanValidationError) as exc_info:
        validate_plan_specification(_spec(goal=RunningGoal.RACE_TRAINING))
    details = exc_info.value.details
    assert any("target_race_distance_km" in detail for detail in details)
    assert any("target_race_time_sec" in detail for detail in details)


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_plan_specification(_spec(weekday_set=()))


def test_generates_one_workout_per_training_day(beginner_spec):
    """Test that 8 weeks x 3 days yields 24 workouts inside the plan range."""
    workouts = generate_workouts(beginner_spec)

    assert len(workouts) == 24
    assert [workout.date for workout in workouts] == sorted(workout.date for workout in workouts)
    assert len({workout.date for workout in workouts}) == 24
    for workout in workouts:
        assert beginner_spec.start_date <= workout.date < beginner_spec.end_date
        assert Weekday.of(workout.date) in beginner_spec.weekday_set


def test_generation_is_deterministic(race_spec):
    """Test that the same specification always yields identical workouts."""
    first = generate_workouts(race_spec)
    second = generate_workouts(race_spec)
    dump = lambda workouts: json.dumps([workout.model_dump(mode="json") for workout in workouts])  # noqa: E731
    assert dump(first) == dump(second)


def test_weekday_order_does_not_change_output():
    """Test that the order weekdays are given in does not matter."""
    forward = generate_workouts(_spec(weekday_set=[Weekday.MONDAY, Weekday.FRIDAY]))
    backward = generate_workouts(_spec(weekday_set=[Weekday.FRIDAY, Weekday.MONDAY, Weekday.FRIDAY]))
    assert forward == backward


def test_workouts_follow_phases(beginner_spec):
    """Test that an 8-week beginner plan moves from easy to tempo to intervals."""
    workouts = generate_workouts(beginner_spec)
    by_week = {}
    for workout in workouts:
        by_week.setdefault((workout.date - beginner_spec.start_date).days // 7, []).append(workout.workout_type)

    assert set(by_week[0]) == {WorkoutType.EASY}
    assert set(by_week[2]) == {WorkoutType.TEMPO}
    assert set(by_week[7]) == {WorkoutType.INTERVALS}


def test_two_week_plan_is_all_peak():
    """Test that a short plan only contains Peak sessions."""
    workouts = generate_workouts(_spec(end_date=date(2025, 1, 20)))
    assert len(workouts) == 6
    assert {workout.description for workout in workouts} == {"Fitness Intervals"}


def test_couch_to_5k_progresses_every_two_weeks():
    """Test that run/walk ratios advance with the week number."""
    workouts = generate_workouts(
        _spec(goal=RunningGoal.COUCH_TO_5K, end_date=date(2025, 1, 6) + timedelta(weeks=12))
    )
    first = workouts[0]
    last = workouts[-1]
    assert first.description == "Run 1 min / Walk 2 min"
    assert first.duration_sec == 30 * 60
    assert last.description == "Run 8 min / Walk 1 min"
    assert last.duration_sec == 40 * 60


def test_weekly_intents_cover_every_weekday(race_spec):
    weekly = build_weekly_intents(race_spec, 12)
    assert len(weekly) == 12
    assert all(set(week) == set(race_spec.weekday_set) for week in weekly)


def test_build_training_plan(beginner_spec):
    """Test that a built plan carries identity, name and timestamps."""
    now = datetime(2025, 1, 1, 9, 30, tzinfo=UTC)
    plan = build_training_plan(beginner_spec, user_id="user-1", plan_id="plan-1", now=now)

    assert plan.id == "plan-1"
    assert plan.user_id == "user-1"
    assert plan.name == "Beginner Fitness Plan"
    assert plan.specification == beginner_spec
    assert plan.created_at == plan.updated_at == now
    assert len(plan.workouts) == 24


def test_build_training_plan_assigns_new_id(beginner_spec):
    first = build_training_plan(beginner_spec, user_id="user-1")
    second = build_training_plan(beginner_spec, user_id="user-1")
    assert first.id != second.id
    assert first.workouts == second.workouts


def test_invalid_specification_builds_nothing():
    with pytest.raises(PlanValidationError):
        build_training_plan(_spec(end_date=date(2025, 1, 1)), user_id="user-1")
