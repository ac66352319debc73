"""Training plan persistence.

Record format (snake_case keys, ISO-8601 dates):
    id, user_id, name, goal, start_date, end_date, fitness_level,
    workout_days, preferred_time, workouts, current_5k_time,
    target_race_distance, target_race_time, created_at, updated_at

Any storage error is raised as PersistenceFailure; the plan value itself
is never regenerated by this layer.
"""

from datetime import UTC, datetime
from typing import Any, Protocol

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from runplan.db.models import TrainingPlanRecord
from runplan.db.session import SessionFactory, session_scope
from runplan.plans.errors import PersistenceFailure
from runplan.plans.types import PlannedWorkout, PlanSpecification, TrainingPlan

RECORD_FIELDS: tuple[str, ...] = (
    "id",
    "user_id",
    "name",
    "goal",
    "start_date",
    "end_date",
    "fitness_level",
    "workout_days",
    "preferred_time",
    "workouts",
    "current_5k_time",
    "target_race_distance",
    "target_race_time",
    "created_at",
    "updated_at",
)


def plan_to_record(plan: TrainingPlan) -> dict[str, Any]:
    """Serialize a plan to its persistence record (JSON-safe)."""
    spec = plan.specification
    return {
        "id": plan.id,
        "user_id": plan.user_id,
        "name": plan.name,
        "goal": spec.goal.value,
        "start_date": spec.start_date.isoformat(),
        "end_date": spec.end_date.isoformat(),
        "fitness_level": spec.fitness_level.value,
        "workout_days": [day.value for day in spec.weekday_set],
        "preferred_time": spec.preferred_time_of_day.value,
        "workouts": [workout.model_dump(mode="json") for workout in plan.workouts],
        "current_5k_time": spec.current_5k_time_sec,
        "target_race_distance": spec.target_race_distance_km,
        "target_race_time": spec.target_race_time_sec,
        "created_at": plan.created_at.isoformat(),
        "updated_at": plan.updated_at.isoformat(),
    }


def _as_aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip; stored values are always UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def plan_from_record(record: dict[str, Any]) -> TrainingPlan:
    """Rebuild a TrainingPlan from its persistence record."""
    spec = PlanSpecification(
        goal=record["goal"],
        fitness_level=record["fitness_level"],
        start_date=record["start_date"],
        end_date=record["end_date"],
        weekday_set=record["workout_days"],
        preferred_time_of_day=record["preferred_time"],
        current_5k_time_sec=record.get("current_5k_time"),
        target_race_distance_km=record.get("target_race_distance"),
        target_race_time_sec=record.get("target_race_time"),
    )
    created_at = record["created_at"]
    updated_at = record["updated_at"]
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    if isinstance(updated_at, str):
        updated_at = datetime.fromisoformat(updated_at)
    return TrainingPlan(
        id=record["id"],
        user_id=record["user_id"],
        name=record["name"],
        specification=spec,
        workouts=tuple(PlannedWorkout.model_validate(workout) for workout in record["workouts"]),
        created_at=_as_aware(created_at),
        updated_at=_as_aware(updated_at),
    )


class TrainingPlanRepository(Protocol):
    def save(self, plan: TrainingPlan) -> None: ...

    def get(self, plan_id: str, user_id: str) -> TrainingPlan | None: ...

    def list_for_user(self, user_id: str) -> list[TrainingPlan]: ...

    def replace(self, plan: TrainingPlan) -> None: ...

    def delete(self, plan_id: str, user_id: str) -> bool: ...


def _record_to_row(record: dict[str, Any], row: TrainingPlanRecord) -> TrainingPlanRecord:
    row.id = record["id"]
    row.user_id = record["user_id"]
    row.name = record["name"]
    row.goal = record["goal"]
    row.start_date = datetime.fromisoformat(record["start_date"]).date()
    row.end_date = datetime.fromisoformat(record["end_date"]).date()
    row.fitness_level = record["fitness_level"]
    row.workout_days = record["workout_days"]
    row.preferred_time = record["preferred_time"]
    row.workouts = record["workouts"]
    row.current_5k_time = record["current_5k_time"]
    row.target_race_distance = record["target_race_distance"]
    row.target_race_time = record["target_race_time"]
    row.created_at = datetime.fromisoformat(record["created_at"])
    row.updated_at = datetime.fromisoformat(record["updated_at"])
    return row


def _row_to_record(row: TrainingPlanRecord) -> dict[str, Any]:
    return {field_name: getattr(row, field_name) for field_name in RECORD_FIELDS}


class SqlTrainingPlanRepository:
    """SQLAlchemy-backed plan repository keyed by (plan id, user id)."""

    def __init__(self, session_factory: SessionFactory | None = None):
        self._session_factory = session_factory

    def save(self, plan: TrainingPlan) -> None:
        """Insert a new plan.

        Raises:
            PersistenceFailure: If the plan cannot be stored
        """
        try:
            with session_scope(self._session_factory) as session:
                session.add(_record_to_row(plan_to_record(plan), TrainingPlanRecord()))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save training plan {plan.id}: {e}")
            raise PersistenceFailure(f"Failed to save training plan {plan.id}") from e
        logger.info("Saved training plan", plan_id=plan.id, user_id=plan.user_id, workout_count=len(plan.workouts))

    def get(self, plan_id: str, user_id: str) -> TrainingPlan | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.execute(
                    select(TrainingPlanRecord).where(
                        TrainingPlanRecord.id == plan_id,
                        TrainingPlanRecord.user_id == user_id,
                    )
                ).scalar_one_or_none()
                return plan_from_record(_row_to_record(row)) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch training plan {plan_id}: {e}")
            raise PersistenceFailure(f"Failed to fetch training plan {plan_id}") from e

    def list_for_user(self, user_id: str) -> list[TrainingPlan]:
        try:
            with session_scope(self._session_factory) as session:
                rows = session.execute(
                    select(TrainingPlanRecord)
                    .where(TrainingPlanRecord.user_id == user_id)
                    .order_by(TrainingPlanRecord.created_at, TrainingPlanRecord.id)
                ).scalars().all()
                return [plan_from_record(_row_to_record(row)) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list training plans for user {user_id}: {e}")
            raise PersistenceFailure(f"Failed to list training plans for user {user_id}") from e

    def replace(self, plan: TrainingPlan) -> None:
        """Overwrite a stored plan with a new plan value (whole-record replace).

        Raises:
            PersistenceFailure: If the plan does not exist or cannot be stored
        """
        try:
            with session_scope(self._session_factory) as session:
                row = session.execute(
                    select(TrainingPlanRecord).where(
                        TrainingPlanRecord.id == plan.id,
                        TrainingPlanRecord.user_id == plan.user_id,
                    )
                ).scalar_one_or_none()
                if row is None:
                    raise PersistenceFailure(f"Training plan {plan.id} not found for user {plan.user_id}")
                _record_to_row(plan_to_record(plan), row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update training plan {plan.id}: {e}")
            raise PersistenceFailure(f"Failed to update training plan {plan.id}") from e

    def delete(self, plan_id: str, user_id: str) -> bool:
        """Delete a plan; returns False when nothing matched."""
        try:
            with session_scope(self._session_factory) as session:
                row = session.execute(
                    select(TrainingPlanRecord).where(
                        TrainingPlanRecord.id == plan_id,
                        TrainingPlanRecord.user_id == user_id,
                    )
                ).scalar_one_or_none()
                if row is None:
                    return False
                session.delete(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete training plan {plan_id}: {e}")
            raise PersistenceFailure(f"Failed to delete training plan {plan_id}") from e
        return True
