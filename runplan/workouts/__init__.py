"""Workouts module - compile workout intents into structured interval workouts."""

from runplan.workouts.compiler import (
    compile_intervals,
    compile_planned_workout,
    create_block,
    create_interval_workout,
    create_progressive_run,
    create_simple_run,
)
from runplan.workouts.conversion import KM_TO_MILES, MPH_PACE_CONSTANT, km_to_miles, miles_to_km
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

__all__ = [
    "KM_TO_MILES",
    "MPH_PACE_CONSTANT",
    "GoalUnit",
    "IntervalBlock",
    "IntervalStep",
    "SpeedAlert",
    "SpeedUnit",
    "StepPurpose",
    "StructuredWorkout",
    "WorkoutGoal",
    "WorkoutInterval",
    "WorkoutStep",
    "compile_intervals",
    "compile_planned_workout",
    "create_block",
    "create_interval_workout",
    "create_progressive_run",
    "create_simple_run",
    "km_to_miles",
    "miles_to_km",
]
