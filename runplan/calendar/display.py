"""Calendar display items derived from planned workouts."""

from dataclasses import dataclass

from runplan.plans.types import PlannedWorkout, WorkoutIntensity, WorkoutType


def format_duration(duration_sec: float) -> str:
    """Format seconds as m:ss (minutes are not wrapped into hours)."""
    total = int(duration_sec)
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}"


@dataclass(frozen=True)
class CalendarItem:
    """One entry on a calendar day.

    Attributes:
        title: Workout type title (e.g. "Long Run")
        details: "<m:ss> • <intensity label>"
        icon_name: Symbol name for the workout type
        workout_type: Source workout type
        intensity: Source intensity
        plan_id: Plan the item came from, if known
    """

    title: str
    details: str
    icon_name: str
    workout_type: WorkoutType
    intensity: WorkoutIntensity
    plan_id: str | None = None


def to_calendar_item(workout: PlannedWorkout, plan_id: str | None = None) -> CalendarItem:
    return CalendarItem(
        title=workout.workout_type.title,
        details=f"{format_duration(workout.duration_sec)} • {workout.intensity.label}",
        icon_name=workout.workout_type.icon_name,
        workout_type=workout.workout_type,
        intensity=workout.intensity,
        plan_id=plan_id,
    )
