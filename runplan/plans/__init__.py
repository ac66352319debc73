"""Plans module - deterministic training-plan generation.

This module provides:
- Canonical plan schema (goals, fitness levels, weekdays, workouts)
- Phase resolution from week index
- The goal x phase x weekday x fitness-level workout rule table
- Plan generation from a PlanSpecification
"""

from runplan.plans.errors import PlanValidationError, UnmappedRuleError
from runplan.plans.generator import build_training_plan, generate_workouts
from runplan.plans.phase import phase_ranges, resolve_phase, total_weeks_between
from runplan.plans.rules import resolve_workout
from runplan.plans.types import (
    FitnessLevel,
    PlannedWorkout,
    PlanSpecification,
    RunningGoal,
    TimeOfDay,
    TrainingPhase,
    TrainingPlan,
    Weekday,
    WorkoutIntensity,
    WorkoutIntent,
    WorkoutType,
)
from runplan.plans.validators import validate_plan_specification

__all__ = [
    "FitnessLevel",
    "PlanSpecification",
    "PlanValidationError",
    "PlannedWorkout",
    "RunningGoal",
    "TimeOfDay",
    "TrainingPhase",
    "TrainingPlan",
    "UnmappedRuleError",
    "Weekday",
    "WorkoutIntensity",
    "WorkoutIntent",
    "WorkoutType",
    "build_training_plan",
    "generate_workouts",
    "phase_ranges",
    "resolve_phase",
    "resolve_workout",
    "total_weeks_between",
    "validate_plan_specification",
]
