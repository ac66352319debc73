"""Calendar expansion - weeks and weekdays to absolute dates.

Dates are computed as:
    start_date + week_offset x 7 days + weekday_offset days
where weekday_offset is the distance from the start date's weekday to the
target weekday using the canonical ordinal (Monday=0 ... Sunday=6). For a
plan starting on a Monday the offset is the weekday ordinal itself.

Schedules are built by folding immutable date -> tuple maps; a date
collision is resolved by merge_schedules, which concatenates.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from functools import reduce
from itertools import groupby

from runplan.calendar.display import CalendarItem, to_calendar_item
from runplan.plans.types import PlannedWorkout, PlanSpecification, Weekday, WorkoutIntent

CalendarSchedule = Mapping[date, tuple[CalendarItem, ...]]


def weekday_offset(start_date: date, weekday: Weekday) -> int:
    """Days from start_date to the first occurrence of weekday (0-6)."""
    return (weekday.ordinal - start_date.weekday()) % 7


def workout_date(start_date: date, week_index: int, weekday: Weekday) -> date:
    return start_date + timedelta(days=week_index * 7 + weekday_offset(start_date, weekday))


def expand_training_days(spec: PlanSpecification, total_weeks: int) -> list[tuple[int, Weekday, date]]:
    """List (week_index, weekday, date) for every training day of the plan.

    Ordered by week, then by weekday in canonical order.
    """
    return [
        (week_index, weekday, workout_date(spec.start_date, week_index, weekday))
        for week_index in range(total_weeks)
        for weekday in spec.weekday_set
    ]


def schedule_workouts(
    spec: PlanSpecification,
    weekly_intents: Sequence[Mapping[Weekday, WorkoutIntent]],
) -> tuple[PlannedWorkout, ...]:
    """Pin per-week workout intents to calendar dates.

    Args:
        spec: Plan specification (start date and weekday set)
        weekly_intents: One weekday -> intent mapping per week, in week order

    Returns:
        Planned workouts sorted by date

    Raises:
        KeyError: If a week is missing an intent for a selected weekday
    """
    planned = [
        PlannedWorkout(
            **weekly_intents[week_index][weekday].model_dump(),
            date=day,
        )
        for week_index, weekday, day in expand_training_days(spec, len(weekly_intents))
    ]
    return tuple(sorted(planned, key=lambda workout: workout.date))


def empty_schedule(start_date: date, end_date: date) -> dict[date, tuple[CalendarItem, ...]]:
    """Every date in [start_date, end_date] mapped to an empty tuple."""
    days = (end_date - start_date).days
    return {start_date + timedelta(days=offset): () for offset in range(days + 1)}


def merge_schedules(left: CalendarSchedule, right: CalendarSchedule) -> dict[date, tuple[CalendarItem, ...]]:
    """Union of two schedules; items on a shared date are concatenated (left first)."""
    merged = dict(left)
    for day, items in right.items():
        merged[day] = merged.get(day, ()) + tuple(items)
    return merged


def group_by_date(
    workouts: Iterable[PlannedWorkout],
    plan_id: str | None = None,
) -> dict[date, tuple[CalendarItem, ...]]:
    ordered = sorted(workouts, key=lambda workout: workout.date)
    return {
        day: tuple(to_calendar_item(workout, plan_id) for workout in group)
        for day, group in groupby(ordered, key=lambda workout: workout.date)
    }


def build_calendar_schedule(
    start_date: date,
    end_date: date,
    workouts: Iterable[PlannedWorkout],
    plan_id: str | None = None,
) -> dict[date, tuple[CalendarItem, ...]]:
    """Date-keyed display schedule with explicit empty days."""
    return merge_schedules(empty_schedule(start_date, end_date), group_by_date(workouts, plan_id))


def combine_schedules(schedules: Iterable[CalendarSchedule]) -> dict[date, tuple[CalendarItem, ...]]:
    """Fold any number of schedules with merge_schedules."""
    return reduce(merge_schedules, schedules, {})
