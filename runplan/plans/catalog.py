"""Goal and fitness-level reference data used around plan generation."""

from runplan.plans.phase import total_weeks_between
from runplan.plans.types import FitnessLevel, PlanSpecification, RunningGoal, Weekday

MINIMUM_WEEKS: dict[RunningGoal, int] = {
    RunningGoal.BEGINNER_FITNESS: 4,
    RunningGoal.COUCH_TO_5K: 8,
    RunningGoal.RACE_TRAINING: 12,
    RunningGoal.IMPROVE_PACE: 6,
}

RECOMMENDED_WEEKS: dict[RunningGoal, int] = {
    RunningGoal.BEGINNER_FITNESS: 8,
    RunningGoal.COUCH_TO_5K: 12,
    RunningGoal.RACE_TRAINING: 16,
    RunningGoal.IMPROVE_PACE: 8,
}

SUGGESTED_WORKOUT_DAYS: dict[FitnessLevel, tuple[Weekday, ...]] = {
    FitnessLevel.BEGINNER: (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.SATURDAY),
    FitnessLevel.INTERMEDIATE: (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY, Weekday.SUNDAY),
    FitnessLevel.ADVANCED: (Weekday.MONDAY, Weekday.TUESDAY, Weekday.THURSDAY, Weekday.FRIDAY, Weekday.SUNDAY),
}

HALF_MARATHON_KM = 21.1
MARATHON_KM = 42.2


def format_race_distance(distance_km: float) -> str:
    """Display name of a race distance ("Half Marathon", "Marathon", "10K")."""
    if distance_km == HALF_MARATHON_KM:
        return "Half Marathon"
    if distance_km == MARATHON_KM:
        return "Marathon"
    return f"{int(distance_km)}K"


def plan_name(spec: PlanSpecification) -> str:
    """Derive the display name of a plan from its goal."""
    if spec.goal == RunningGoal.BEGINNER_FITNESS:
        return "Beginner Fitness Plan"
    if spec.goal == RunningGoal.COUCH_TO_5K:
        return "Couch to 5K Plan"
    if spec.goal == RunningGoal.RACE_TRAINING:
        return f"{format_race_distance(spec.target_race_distance_km or 0.0)} Race Plan"
    if spec.goal == RunningGoal.IMPROVE_PACE:
        return "Speed Improvement Plan"
    raise ValueError(f"Unknown goal: {spec.goal}")


def timeline_warnings(spec: PlanSpecification) -> list[str]:
    """Advisory warnings for plans shorter than the goal's minimum.

    Short plans are still generated; these are for display only.
    """
    weeks = total_weeks_between(spec.start_date, spec.end_date)
    minimum = MINIMUM_WEEKS[spec.goal]
    recommended = RECOMMENDED_WEEKS[spec.goal]
    warnings: list[str] = []
    if weeks < minimum:
        warnings.append(f"{spec.goal.title} plans need at least {minimum} weeks; this plan has {weeks}.")
    elif weeks < recommended:
        warnings.append(f"{recommended} weeks are recommended for {spec.goal.title}; this plan has {weeks}.")
    if weeks < 3:
        warnings.append("Plans shorter than 3 weeks skip the Foundation and Development phases.")
    return warnings
