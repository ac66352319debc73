"""Training plan service - orchestrates generation and its collaborators.

Flow for a new plan:
1. resolve the current user (IdentityUnavailableError if none)
2. generate the complete plan (PlanValidationError before anything else)
3. persist it (PersistenceFailure)
4. publish plan_created

Downstream failures are reported, never retried here. A caller retrying
persistence or device scheduling passes the already generated plan back
in (save_plan, schedule_plan); the plan is never regenerated for a retry.

Build one instance with its collaborators and pass it around; there is
no module-level service singleton.
"""

from collections.abc import Sequence
from datetime import UTC, datetime

from loguru import logger

from runplan.calendar.scheduler import CalendarSchedule, build_calendar_schedule
from runplan.config.settings import settings
from runplan.plans.errors import PersistenceFailure, RunPlanError, SchedulingFailure
from runplan.plans.generator import build_training_plan
from runplan.plans.types import PlannedWorkout, PlanSpecification, TrainingPlan
from runplan.services.device import (
    DeviceSchedulingClient,
    schedule_structured_workout,
    scheduled_start,
)
from runplan.services.events import EventBus, PlanEvent
from runplan.services.identity import IdentityProvider, require_user_id
from runplan.services.persistence import TrainingPlanRepository
from runplan.workouts.compiler import DeviceUnits, compile_planned_workout
from runplan.workouts.models import StructuredWorkout


class TrainingPlanService:
    def __init__(
        self,
        identity: IdentityProvider,
        repository: TrainingPlanRepository,
        event_bus: EventBus | None = None,
        device_client: DeviceSchedulingClient | None = None,
        workout_hour: int | None = None,
        units: DeviceUnits | None = None,
    ):
        self.identity = identity
        self.repository = repository
        self.event_bus = event_bus or EventBus()
        self.device_client = device_client
        self.workout_hour = workout_hour if workout_hour is not None else settings.default_workout_hour
        self.units = units or settings.device_units

    def preview_plan(self, spec: PlanSpecification) -> TrainingPlan:
        """Generate a plan for the current user without persisting it."""
        return build_training_plan(spec, user_id=require_user_id(self.identity))

    def create_plan(self, spec: PlanSpecification, plan_id: str | None = None) -> TrainingPlan:
        """Generate, persist and announce a new plan.

        Raises:
            IdentityUnavailableError: If no user is signed in
            PlanValidationError: If the specification is invalid
            PersistenceFailure: If the plan cannot be stored; retry with
                save_plan(plan) using the plan attached to the error
        """
        user_id = require_user_id(self.identity)
        plan = build_training_plan(spec, user_id=user_id, plan_id=plan_id)
        try:
            self.save_plan(plan)
        except PersistenceFailure as e:
            if e.plan is not None:
                raise
            raise PersistenceFailure(str(e), plan=plan) from e
        return plan

    def save_plan(self, plan: TrainingPlan) -> TrainingPlan:
        """Persist an already generated plan and publish plan_created."""
        self.repository.save(plan)
        self.event_bus.publish(PlanEvent.created(plan))
        logger.info("Created training plan", plan_id=plan.id, user_id=plan.user_id, name=plan.name)
        return plan

    def list_plans(self) -> list[TrainingPlan]:
        return self.repository.list_for_user(require_user_id(self.identity))

    def get_plan(self, plan_id: str) -> TrainingPlan | None:
        return self.repository.get(plan_id, require_user_id(self.identity))

    def replace_workouts(self, plan_id: str, workouts: Sequence[PlannedWorkout]) -> TrainingPlan:
        """Replace a plan's workout list as a whole and publish plan_updated.

        Raises:
            PersistenceFailure: If the plan does not exist or cannot be stored
        """
        user_id = require_user_id(self.identity)
        current = self.repository.get(plan_id, user_id)
        if current is None:
            raise PersistenceFailure(f"Training plan {plan_id} not found for user {user_id}")
        updated = current.with_workouts(tuple(workouts), updated_at=datetime.now(UTC))
        self.repository.replace(updated)
        self.event_bus.publish(PlanEvent.updated(updated))
        logger.info("Replaced plan workouts", plan_id=plan_id, workout_count=len(updated.workouts))
        return updated

    def delete_plan(self, plan_id: str) -> bool:
        deleted = self.repository.delete(plan_id, require_user_id(self.identity))
        if deleted:
            self.event_bus.publish(PlanEvent.deleted(plan_id))
        return deleted

    def calendar_schedule(self, plan: TrainingPlan) -> CalendarSchedule:
        spec = plan.specification
        return build_calendar_schedule(spec.start_date, spec.end_date, plan.workouts, plan_id=plan.id)

    def compile_workout(self, workout: PlannedWorkout) -> StructuredWorkout:
        return compile_planned_workout(
            workout,
            warmup_minutes=settings.default_warmup_minutes or None,
            cooldown_minutes=settings.default_cooldown_minutes or None,
            units=self.units,
        )

    def schedule_plan(self, plan: TrainingPlan, workouts: Sequence[PlannedWorkout] | None = None) -> int:
        """Compile and schedule a plan's workouts on the device.

        Args:
            plan: Already generated plan (never regenerated here)
            workouts: Subset to schedule, e.g. SchedulingFailure.remaining
                from a previous attempt; all plan workouts when omitted

        Returns:
            Number of workouts scheduled

        Raises:
            RunPlanError: If no device client is configured
            AuthorizationRequiredError: If the device is not authorized
            SchedulingFailure: If the device rejects a workout; carries the
                accepted count and the workouts still to schedule
        """
        if self.device_client is None:
            raise RunPlanError("No device scheduling client configured")

        time_of_day = plan.specification.preferred_time_of_day
        pending = tuple(workouts if workouts is not None else plan.workouts)
        scheduled = 0
        for workout in pending:
            start = scheduled_start(workout.date, time_of_day, self.workout_hour)
            try:
                schedule_structured_workout(self.device_client, self.compile_workout(workout), start)
            except SchedulingFailure as e:
                logger.warning(
                    "Device scheduling stopped",
                    plan_id=plan.id,
                    scheduled=scheduled,
                    remaining=len(pending) - scheduled,
                )
                raise SchedulingFailure(
                    str(e), workout=workout, scheduled=scheduled, remaining=pending[scheduled:]
                ) from e
            scheduled += 1
        logger.info("Scheduled plan workouts on device", plan_id=plan.id, scheduled=scheduled)
        return scheduled
