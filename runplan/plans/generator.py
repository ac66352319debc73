"""Plan generation - specification in, complete TrainingPlan out.

Pipeline:
1. validate the specification (raises before anything is produced)
2. resolve each week's phase
3. resolve each (week, weekday) to a WorkoutIntent
4. pin intents to dates

Generation is pure: the same specification always yields the same
workouts. Identity and timestamps are supplied by the caller.
"""

import uuid
from datetime import UTC, datetime

from loguru import logger

from runplan.calendar.scheduler import schedule_workouts
from runplan.plans.catalog import plan_name
from runplan.plans.phase import resolve_phase
from runplan.plans.rules import resolve_workout
from runplan.plans.types import PlannedWorkout, PlanSpecification, TrainingPlan, Weekday, WorkoutIntent
from runplan.plans.validators import validate_plan_specification


def build_weekly_intents(spec: PlanSpecification, total_weeks: int) -> list[dict[Weekday, WorkoutIntent]]:
    """Resolve one weekday -> intent mapping per week."""
    weekly: list[dict[Weekday, WorkoutIntent]] = []
    for week_index in range(total_weeks):
        phase = resolve_phase(total_weeks, week_index)
        logger.debug("Resolving week", week_index=week_index, phase=phase.value)
        weekly.append(
            {
                weekday: resolve_workout(spec.goal, phase, weekday, spec.fitness_level, week_index)
                for weekday in spec.weekday_set
            }
        )
    return weekly


def generate_workouts(spec: PlanSpecification) -> tuple[PlannedWorkout, ...]:
    """Generate the full dated workout list for a specification.

    Raises:
        PlanValidationError: If the specification is invalid
    """
    total_weeks = validate_plan_specification(spec)
    workouts = schedule_workouts(spec, build_weekly_intents(spec, total_weeks))
    logger.info(
        "Generated plan workouts",
        goal=spec.goal.value,
        fitness_level=spec.fitness_level.value,
        total_weeks=total_weeks,
        workout_count=len(workouts),
    )
    return workouts


def build_training_plan(
    spec: PlanSpecification,
    user_id: str,
    plan_id: str | None = None,
    now: datetime | None = None,
) -> TrainingPlan:
    """Generate a complete TrainingPlan owned by user_id.

    Args:
        spec: Plan specification
        user_id: Owner of the plan
        plan_id: Plan identifier (a new UUID when omitted)
        now: Creation timestamp (current UTC time when omitted)

    Returns:
        Fully generated, immutable TrainingPlan
    """
    workouts = generate_workouts(spec)
    timestamp = now or datetime.now(UTC)
    return TrainingPlan(
        id=plan_id or str(uuid.uuid4()),
        user_id=user_id,
        name=plan_name(spec),
        specification=spec,
        workouts=workouts,
        created_at=timestamp,
        updated_at=timestamp,
    )
