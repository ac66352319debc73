"""In-process plan event bus.

Events carry either the full plan (created, updated) or only its id
(deleted). A failing subscriber is logged and skipped; the remaining
subscribers still receive the event.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from loguru import logger

from runplan.plans.types import TrainingPlan


class PlanEventType(StrEnum):
    PLAN_CREATED = "plan_created"
    PLAN_UPDATED = "plan_updated"
    PLAN_DELETED = "plan_deleted"


@dataclass(frozen=True)
class PlanEvent:
    type: PlanEventType
    plan_id: str
    plan: TrainingPlan | None = None

    @classmethod
    def created(cls, plan: TrainingPlan) -> "PlanEvent":
        return cls(type=PlanEventType.PLAN_CREATED, plan_id=plan.id, plan=plan)

    @classmethod
    def updated(cls, plan: TrainingPlan) -> "PlanEvent":
        return cls(type=PlanEventType.PLAN_UPDATED, plan_id=plan.id, plan=plan)

    @classmethod
    def deleted(cls, plan_id: str) -> "PlanEvent":
        return cls(type=PlanEventType.PLAN_DELETED, plan_id=plan_id)


PlanEventHandler = Callable[[PlanEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: list[tuple[PlanEventType | None, PlanEventHandler]] = []

    def subscribe(self, handler: PlanEventHandler, event_type: PlanEventType | None = None) -> Callable[[], None]:
        """Register a handler for one event type (or all when None).

        Returns:
            Callable that removes the subscription
        """
        entry = (event_type, handler)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    def publish(self, event: PlanEvent) -> int:
        """Deliver an event; returns the number of handlers that succeeded."""
        delivered = 0
        for event_type, handler in list(self._subscribers):
            if event_type is not None and event_type != event.type:
                continue
            try:
                handler(event)
                delivered += 1
            except Exception:
                logger.exception(f"Plan event handler failed for {event.type} (plan_id={event.plan_id})")
        logger.debug("Published plan event", event_type=event.type.value, plan_id=event.plan_id, delivered=delivered)
        return delivered
