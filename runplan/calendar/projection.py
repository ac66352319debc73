"""Calendar projection - keeps a display schedule in sync with plan events."""

from loguru import logger

from runplan.calendar.scheduler import CalendarSchedule, build_calendar_schedule, combine_schedules
from runplan.services.events import PlanEvent, PlanEventType


class CalendarProjection:
    """Event bus subscriber holding one schedule per plan.

    The combined schedule merges all plans; items from different plans on
    the same date are concatenated.
    """

    def __init__(self) -> None:
        self._schedules: dict[str, CalendarSchedule] = {}

    def __call__(self, event: PlanEvent) -> None:
        if event.type == PlanEventType.PLAN_DELETED:
            self._schedules.pop(event.plan_id, None)
            return
        if event.plan is None:
            logger.warning(f"Plan event {event.type} without plan payload (plan_id={event.plan_id})")
            return
        spec = event.plan.specification
        self._schedules[event.plan_id] = build_calendar_schedule(
            spec.start_date,
            spec.end_date,
            event.plan.workouts,
            plan_id=event.plan_id,
        )

    @property
    def plan_ids(self) -> list[str]:
        return list(self._schedules)

    @property
    def schedule(self) -> CalendarSchedule:
        return combine_schedules(self._schedules[plan_id] for plan_id in sorted(self._schedules))
