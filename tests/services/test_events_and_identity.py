"""Tests for the plan event bus and identity providers."""

from datetime import UTC, datetime

import pytest

from runplan.plans.errors import IdentityUnavailableError
from runplan.plans.generator import build_training_plan
from runplan.services.events import EventBus, PlanEvent, PlanEventType
from runplan.services.identity import StaticIdentityProvider, require_user_id


@pytest.fixture
def plan(beginner_spec):
    return build_training_plan(beginner_spec, user_id="user-1", plan_id="plan-1", now=datetime(2025, 1, 1, tzinfo=UTC))


def test_require_user_id():
    assert require_user_id(StaticIdentityProvider("user-1")) == "user-1"


@pytest.mark.parametrize("user_id", [None, ""])
def test_missing_user_raises(user_id):
    with pytest.raises(IdentityUnavailableError):
        require_user_id(StaticIdentityProvider(user_id))


def test_event_constructors(plan):
    created = PlanEvent.created(plan)
    deleted = PlanEvent.deleted("plan-1")
    assert (created.type, created.plan_id, created.plan) == (PlanEventType.PLAN_CREATED, "plan-1", plan)
    assert (deleted.type, deleted.plan) == (PlanEventType.PLAN_DELETED, None)


def test_subscribers_filter_by_type(plan):
    bus = EventBus()
    everything = []
    deletions = []
    bus.subscribe(everything.append)
    bus.subscribe(deletions.append, PlanEventType.PLAN_DELETED)

    assert bus.publish(PlanEvent.created(plan)) == 1
    assert bus.publish(PlanEvent.deleted("plan-1")) == 2
    assert [event.type for event in everything] == [PlanEventType.PLAN_CREATED, PlanEventType.PLAN_DELETED]
    assert [event.type for event in deletions] == [PlanEventType.PLAN_DELETED]


def test_failing_subscriber_does_not_block_others(plan):
    """Test that one handler raising still lets later handlers run."""
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("subscriber bug")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    assert bus.publish(PlanEvent.created(plan)) == 1
    assert len(received) == 1


def test_unsubscribe(plan):
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(received.append)

    unsubscribe()
    unsubscribe()

    assert bus.publish(PlanEvent.created(plan)) == 0
    assert received == []
