"""Plan specification validators with hard guardrails.

All checks run before generation starts, so the engine either returns a
complete plan or raises; it never returns a partial one.
"""

from loguru import logger

from runplan.plans.errors import PlanValidationError
from runplan.plans.phase import total_weeks_between
from runplan.plans.types import PlanSpecification, RunningGoal


def validate_plan_specification(spec: PlanSpecification) -> int:
    """Validate a plan specification.

    Enforces:
    - end_date is after start_date
    - at least one training weekday
    - at least one whole week between start and end
    - race training carries a positive race distance and time

    Args:
        spec: Specification to validate

    Returns:
        Total number of whole weeks in the plan

    Raises:
        PlanValidationError: If any invariant is violated
    """
    details: list[str] = []

    if spec.end_date <= spec.start_date:
        details.append(f"end_date {spec.end_date.isoformat()} must be after start_date {spec.start_date.isoformat()}")
    if not spec.weekday_set:
        details.append("weekday_set must contain at least one weekday")
    if spec.goal == RunningGoal.RACE_TRAINING:
        if not spec.target_race_distance_km:
            details.append("race_training requires a positive target_race_distance_km")
        if not spec.target_race_time_sec:
            details.append("race_training requires a positive target_race_time_sec")

    total_weeks = total_weeks_between(spec.start_date, spec.end_date)
    if spec.end_date > spec.start_date and total_weeks < 1:
        details.append(f"plan must span at least one whole week, got {(spec.end_date - spec.start_date).days} days")

    if details:
        logger.warning(
            "Plan specification rejected",
            goal=spec.goal.value,
            details=details,
        )
        raise PlanValidationError("INVALID_PLAN_SPECIFICATION", details)

    return total_weeks
