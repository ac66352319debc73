"""Interval compiler - workout intent to device-schedulable structure.

Every WorkoutInterval becomes one block with a single step:
- goal: the interval distance in device units
- alert: target speed +/- SPEED_TOLERANCE, from the midpoint of the pace range
- iterations: copied verbatim

Warmup and cooldown are time goals (minutes), attached around the blocks.
"""

from typing import Literal

from loguru import logger

from runplan.plans.types import PlannedWorkout, WorkoutType
from runplan.workouts.conversion import average_pace, km_to_miles, pace_to_kmh, pace_to_mph, speed_band
from runplan.workouts.models import (
    GoalUnit,
    IntervalBlock,
    IntervalStep,
    SpeedAlert,
    SpeedUnit,
    StepPurpose,
    StructuredWorkout,
    WorkoutGoal,
    WorkoutInterval,
    WorkoutStep,
)

DeviceUnits = Literal["imperial", "metric"]

DEFAULT_SEGMENT_MINUTES = 5.0
DEFAULT_WORKOUT_NAME = "Planned Run"

SIMPLE_RUN_PACE_SPREAD = 0.5
PROGRESSION_PACE_SPREAD = 0.25
DEFAULT_PACE_INCREASE = 0.5

# Default decomposition for interval days without a run/walk pattern
DEFAULT_REPEAT_DISTANCE_M = 400.0
DEFAULT_REPEAT_RECOVERY_SEC = 60.0
DEFAULT_REPEAT_COUNT = 8


def _validate_interval(interval: WorkoutInterval) -> None:
    if interval.distance_km <= 0:
        raise ValueError(f"Interval distance must be positive, got {interval.distance_km}")
    if interval.iterations < 1:
        raise ValueError(f"Interval iterations must be >= 1, got {interval.iterations}")


def create_block(interval: WorkoutInterval, units: DeviceUnits = "imperial") -> IntervalBlock:
    """Compile one interval into a single-step block.

    Raises:
        ValueError: If the distance, pace range or iteration count is invalid
    """
    _validate_interval(interval)
    pace = average_pace(interval.target_pace_range)

    if units == "imperial":
        goal = WorkoutGoal.distance(km_to_miles(interval.distance_km), GoalUnit.MILES)
        low, high = speed_band(pace_to_mph(pace))
        alert = SpeedAlert(low=low, high=high, unit=SpeedUnit.MPH)
    elif units == "metric":
        goal = WorkoutGoal.distance(interval.distance_km, GoalUnit.KILOMETERS)
        low, high = speed_band(pace_to_kmh(pace))
        alert = SpeedAlert(low=low, high=high, unit=SpeedUnit.KMH)
    else:
        raise ValueError(f"Invalid units: {units}. Must be 'imperial' or 'metric'")

    step = IntervalStep(purpose=interval.purpose, goal=goal, alert=alert)
    return IntervalBlock(steps=(step,), iterations=interval.iterations)


def _time_step(minutes: float | None) -> WorkoutStep | None:
    if minutes is None:
        return None
    if minutes < 0:
        raise ValueError(f"Segment length must be >= 0 minutes, got {minutes}")
    return WorkoutStep(goal=WorkoutGoal.time(minutes, GoalUnit.MINUTES))


def compile_intervals(
    intervals: list[WorkoutInterval],
    name: str = "",
    warmup_minutes: float | None = DEFAULT_SEGMENT_MINUTES,
    cooldown_minutes: float | None = DEFAULT_SEGMENT_MINUTES,
    units: DeviceUnits = "imperial",
) -> StructuredWorkout:
    """Compile an ordered interval list into a structured workout.

    Args:
        intervals: Ordered intervals, one block each (at least one)
        name: Display name ("Planned Run" when empty)
        warmup_minutes: Warmup length, None to omit
        cooldown_minutes: Cooldown length, None to omit
        units: Device unit system

    Returns:
        StructuredWorkout with warmup, blocks and cooldown

    Raises:
        ValueError: If the interval list is empty or an interval is invalid
    """
    if not intervals:
        raise ValueError("A structured workout needs at least one interval")

    blocks = tuple(create_block(interval, units) for interval in intervals)
    return StructuredWorkout(
        display_name=name or DEFAULT_WORKOUT_NAME,
        warmup=_time_step(warmup_minutes),
        blocks=blocks,
        cooldown=_time_step(cooldown_minutes),
    )


def create_simple_run(
    name: str,
    distance_km: float,
    target_pace: float,
    units: DeviceUnits = "imperial",
) -> StructuredWorkout:
    """Single continuous run at target_pace +/- 0.5 min/km."""
    interval = WorkoutInterval(
        purpose=StepPurpose.WORK,
        distance_km=distance_km,
        target_pace_range=(target_pace - SIMPLE_RUN_PACE_SPREAD, target_pace + SIMPLE_RUN_PACE_SPREAD),
        iterations=1,
    )
    return compile_intervals([interval], name=name, units=units)


def create_interval_workout(
    name: str,
    work_interval: WorkoutInterval,
    recovery_interval: WorkoutInterval,
    units: DeviceUnits = "imperial",
) -> StructuredWorkout:
    """Work block followed by a recovery block, each with its own iterations."""
    return compile_intervals([work_interval, recovery_interval], name=name, units=units)


def create_progressive_run(
    name: str,
    base_distance_km: float,
    base_pace: float,
    progressions: int,
    pace_increase: float = DEFAULT_PACE_INCREASE,
    units: DeviceUnits = "imperial",
) -> StructuredWorkout:
    """Equal-distance segments, each pace_increase min/km faster than the last.

    Raises:
        ValueError: If progressions < 1 or a segment pace drops to zero or below
    """
    if progressions < 1:
        raise ValueError(f"progressions must be >= 1, got {progressions}")

    intervals = []
    for index in range(progressions):
        pace = base_pace - index * pace_increase
        intervals.append(
            WorkoutInterval(
                purpose=StepPurpose.WORK,
                distance_km=base_distance_km,
                target_pace_range=(pace - PROGRESSION_PACE_SPREAD, pace + PROGRESSION_PACE_SPREAD),
                iterations=1,
            )
        )
    return compile_intervals(intervals, name=name, units=units)


def _distance_goal(distance_km: float, units: DeviceUnits | None) -> WorkoutGoal:
    if units is None:
        return WorkoutGoal.distance(distance_km * 1000, GoalUnit.METERS)
    if units == "imperial":
        return WorkoutGoal.distance(km_to_miles(distance_km), GoalUnit.MILES)
    if units == "metric":
        return WorkoutGoal.distance(distance_km, GoalUnit.KILOMETERS)
    raise ValueError(f"Invalid units: {units}. Must be 'imperial' or 'metric'")


def compile_planned_workout(
    workout: PlannedWorkout,
    warmup_minutes: float | None = None,
    cooldown_minutes: float | None = None,
    units: DeviceUnits | None = None,
) -> StructuredWorkout:
    """Default device decomposition of a generated workout.

    - intervals with a run/walk pattern: (run, walk) time steps repeated for
      the whole duration
    - other intervals: 8 x (400 m work, 60 s recovery)
    - everything else: one work step, distance goal when distance is known,
      time goal otherwise

    Distance goals of steady runs are in miles or kilometers when units is
    given, meters otherwise.
    """
    if workout.workout_type == WorkoutType.INTERVALS:
        if workout.run_walk is not None:
            pattern = workout.run_walk
            cycle_minutes = pattern.run_minutes + pattern.walk_minutes
            steps = [IntervalStep(StepPurpose.WORK, WorkoutGoal.time(pattern.run_minutes, GoalUnit.MINUTES))]
            if pattern.walk_minutes:
                steps.append(IntervalStep(StepPurpose.RECOVERY, WorkoutGoal.time(pattern.walk_minutes, GoalUnit.MINUTES)))
            iterations = max(1, int(workout.duration_sec // 60) // cycle_minutes)
            block = IntervalBlock(steps=tuple(steps), iterations=iterations)
        else:
            block = IntervalBlock(
                steps=(
                    IntervalStep(StepPurpose.WORK, WorkoutGoal.distance(DEFAULT_REPEAT_DISTANCE_M, GoalUnit.METERS)),
                    IntervalStep(StepPurpose.RECOVERY, WorkoutGoal.time(DEFAULT_REPEAT_RECOVERY_SEC, GoalUnit.SECONDS)),
                ),
                iterations=DEFAULT_REPEAT_COUNT,
            )
    elif workout.distance_km is not None:
        block = IntervalBlock(steps=(IntervalStep(StepPurpose.WORK, _distance_goal(workout.distance_km, units)),))
    else:
        block = IntervalBlock(
            steps=(IntervalStep(StepPurpose.WORK, WorkoutGoal.time(workout.duration_sec, GoalUnit.SECONDS)),),
        )

    logger.debug(
        "Compiled planned workout",
        date=workout.date.isoformat(),
        workout_type=workout.workout_type.value,
        iterations=block.iterations,
    )
    return StructuredWorkout(
        display_name=workout.workout_type.title,
        warmup=_time_step(warmup_minutes),
        blocks=(block,),
        cooldown=_time_step(cooldown_minutes),
    )
