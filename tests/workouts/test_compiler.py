"""Tests for the interval compiler."""

from datetime import date

import pytest

from runplan.plans.types import PlannedWorkout, RunWalkPattern, WorkoutIntensity, WorkoutType
from runplan.workouts.compiler import (
    DEFAULT_WORKOUT_NAME,
    compile_intervals,
    compile_planned_workout,
    create_block,
    create_interval_workout,
    create_progressive_run,
    create_simple_run,
)
from runplan.workouts.conversion import KM_TO_MILES, MPH_PACE_CONSTANT
from runplan.workouts.models import GoalUnit, SpeedUnit, StepPurpose, WorkoutGoal, WorkoutInterval


def test_create_block_imperial():
    """Test that an interval becomes one mile-goal step with an mph alert."""
    interval = WorkoutInterval(StepPurpose.WORK, 1.0, (4.0, 5.0), iterations=4)
    block = create_block(interval)

    assert block.iterations == 4
    assert len(block.steps) == 1
    step = block.steps[0]
    assert step.purpose == StepPurpose.WORK
    assert step.goal.kind == "distance"
    assert step.goal.unit == GoalUnit.MILES
    assert step.goal.value == pytest.approx(KM_TO_MILES)
    target = MPH_PACE_CONSTANT / 4.5
    assert step.alert.unit == SpeedUnit.MPH
    assert step.alert.low == pytest.approx(target - 1.0)
    assert step.alert.high == pytest.approx(target + 1.0)
    assert step.alert.target == pytest.approx(target)


def test_create_block_metric():
    interval = WorkoutInterval(StepPurpose.RECOVERY, 0.4, (5.5, 6.5))
    block = create_block(interval, units="metric")

    step = block.steps[0]
    assert step.purpose == StepPurpose.RECOVERY
    assert step.goal.unit == GoalUnit.KILOMETERS
    assert step.goal.value == pytest.approx(0.4)
    assert step.alert.unit == SpeedUnit.KMH
    assert (step.alert.low, step.alert.high) == (pytest.approx(9.0), pytest.approx(11.0))


@pytest.mark.parametrize(
    "interval",
    [
        WorkoutInterval(StepPurpose.WORK, 0.0, (4.0, 5.0)),
        WorkoutInterval(StepPurpose.WORK, 1.0, (5.0, 4.0)),
        WorkoutInterval(StepPurpose.WORK, 1.0, (0.0, 4.0)),
        WorkoutInterval(StepPurpose.WORK, 1.0, (4.0, 5.0), iterations=0),
    ],
)
def test_create_block_rejects_invalid_interval(interval):
    with pytest.raises(ValueError):
        create_block(interval)


def test_create_block_rejects_unknown_units():
    with pytest.raises(ValueError):
        create_block(WorkoutInterval(StepPurpose.WORK, 1.0, (4.0, 5.0)), units="nautical")


def test_compile_intervals_attaches_warmup_and_cooldown():
    """Test default five-minute warmup and cooldown around the blocks."""
    workout = compile_intervals([WorkoutInterval(StepPurpose.WORK, 1.0, (4.0, 5.0))])

    assert workout.display_name == DEFAULT_WORKOUT_NAME
    assert workout.warmup.goal == WorkoutGoal.time(5.0, GoalUnit.MINUTES)
    assert workout.cooldown.goal == WorkoutGoal.time(5.0, GoalUnit.MINUTES)
    assert workout.segments == [workout.warmup, workout.blocks[0], workout.cooldown]


def test_compile_intervals_can_omit_warmup_and_cooldown():
    workout = compile_intervals(
        [WorkoutInterval(StepPurpose.WORK, 1.0, (4.0, 5.0))],
        name="Strides",
        warmup_minutes=None,
        cooldown_minutes=None,
    )
    assert workout.display_name == "Strides"
    assert workout.warmup is None
    assert workout.cooldown is None
    assert len(workout.segments) == 1


def test_compile_intervals_rejects_empty_list():
    with pytest.raises(ValueError):
        compile_intervals([])


def test_create_simple_run():
    """Test a continuous run at target pace +/- 0.5 min/km."""
    workout = create_simple_run("Easy 5K", 5.0, 6.0)

    assert workout.display_name == "Easy 5K"
    assert len(workout.blocks) == 1
    step = workout.blocks[0].steps[0]
    assert step.goal.value == pytest.approx(5.0 * KM_TO_MILES)
    assert step.alert.target == pytest.approx(MPH_PACE_CONSTANT / 6.0)


def test_create_interval_workout_keeps_iterations():
    """Test that work and recovery blocks keep their own repeat counts."""
    work = WorkoutInterval(StepPurpose.WORK, 0.4, (4.0, 4.5), iterations=8)
    recovery = WorkoutInterval(StepPurpose.RECOVERY, 0.2, (6.0, 7.0), iterations=8)
    workout = create_interval_workout("8 x 400", work, recovery, units="metric")

    assert [block.iterations for block in workout.blocks] == [8, 8]
    assert [block.steps[0].purpose for block in workout.blocks] == [StepPurpose.WORK, StepPurpose.RECOVERY]
    assert workout.blocks[0].steps[0].goal.value == pytest.approx(0.4)


def test_create_progressive_run_gets_faster():
    """Test that each segment targets a higher speed than the last."""
    workout = create_progressive_run("Progression", 1.0, 6.0, progressions=3)

    targets = [block.steps[0].alert.target for block in workout.blocks]
    assert len(targets) == 3
    assert targets == sorted(targets)
    assert targets[0] == pytest.approx(MPH_PACE_CONSTANT / 6.0)
    assert targets[2] == pytest.approx(MPH_PACE_CONSTANT / 5.0)


def test_create_progressive_run_rejects_impossible_pace():
    with pytest.raises(ValueError):
        create_progressive_run("Too fast", 1.0, 1.0, progressions=4, pace_increase=0.5)
    with pytest.raises(ValueError):
        create_progressive_run("None", 1.0, 6.0, progressions=0)


def _planned(**overrides) -> PlannedWorkout:
    values = {
        "workout_type": WorkoutType.EASY,
        "duration_sec": 1800.0,
        "distance_km": 5.0,
        "intensity": WorkoutIntensity.LOW,
        "description": "Base Building Run",
        "date": date(2025, 1, 6),
    }
    values.update(overrides)
    return PlannedWorkout(**values)


def test_compile_planned_run_walk_intervals():
    """Test that a run/walk session repeats its cycle for the whole duration."""
    workout = compile_planned_workout(
        _planned(
            workout_type=WorkoutType.INTERVALS,
            duration_sec=2100.0,
            distance_km=None,
            run_walk=RunWalkPattern(run_minutes=3, walk_minutes=1),
        )
    )

    block = workout.blocks[0]
    assert block.iterations == 8
    assert [step.purpose for step in block.steps] == [StepPurpose.WORK, StepPurpose.RECOVERY]
    assert block.steps[0].goal.seconds == 180
    assert block.steps[1].goal.seconds == 60
    assert workout.warmup is None
    assert workout.cooldown is None
    assert workout.display_name == "Interval Training"


def test_compile_planned_run_walk_without_walk():
    workout = compile_planned_workout(
        _planned(
            workout_type=WorkoutType.INTERVALS,
            duration_sec=2400.0,
            distance_km=None,
            run_walk=RunWalkPattern(run_minutes=8, walk_minutes=0),
        )
    )
    block = workout.blocks[0]
    assert len(block.steps) == 1
    assert block.iterations == 5


def test_compile_planned_generic_intervals():
    """Test the 8 x (400 m, 60 s) default for interval days."""
    workout = compile_planned_workout(_planned(workout_type=WorkoutType.INTERVALS, distance_km=5.0))

    block = workout.blocks[0]
    assert block.iterations == 8
    assert block.steps[0].goal.meters == 400
    assert block.steps[1].goal.seconds == 60


def test_compile_planned_distance_run_with_warmup():
    workout = compile_planned_workout(_planned(), warmup_minutes=5.0, cooldown_minutes=10.0)

    step = workout.blocks[0].steps[0]
    assert step.goal.unit == GoalUnit.METERS
    assert step.goal.value == pytest.approx(5000)
    assert workout.warmup.goal.seconds == 300
    assert workout.cooldown.goal.seconds == 600


def test_compile_planned_time_only_run():
    workout = compile_planned_workout(_planned(distance_km=None, duration_sec=1500.0))
    goal = workout.blocks[0].steps[0].goal
    assert goal.kind == "time"
    assert goal.seconds == 1500


def test_goal_meters_from_miles():
    assert WorkoutGoal.distance(1.0, GoalUnit.MILES).meters == pytest.approx(1000 / KM_TO_MILES)
    assert WorkoutGoal.time(2.0, GoalUnit.MINUTES).meters is None


@pytest.mark.parametrize(
    ("units", "unit", "value"),
    [("imperial", GoalUnit.MILES, 5.0 * KM_TO_MILES), ("metric", GoalUnit.KILOMETERS, 5.0)],
)
def test_compile_planned_distance_in_device_units(units, unit, value):
    goal = compile_planned_workout(_planned(), units=units).blocks[0].steps[0].goal
    assert goal.unit == unit
    assert goal.value == pytest.approx(value)
    assert goal.meters == pytest.approx(5000)
