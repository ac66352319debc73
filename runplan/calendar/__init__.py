"""Calendar expansion and display schedules."""

from runplan.calendar.adapters import from_platform_weekday, to_platform_weekday
from runplan.calendar.display import CalendarItem, format_duration, to_calendar_item
from runplan.calendar.scheduler import (
    CalendarSchedule,
    build_calendar_schedule,
    combine_schedules,
    empty_schedule,
    expand_training_days,
    merge_schedules,
    schedule_workouts,
    weekday_offset,
)

__all__ = [
    "CalendarItem",
    "CalendarSchedule",
    "build_calendar_schedule",
    "combine_schedules",
    "empty_schedule",
    "expand_training_days",
    "format_duration",
    "from_platform_weekday",
    "merge_schedules",
    "schedule_workouts",
    "to_calendar_item",
    "to_platform_weekday",
    "weekday_offset",
]
