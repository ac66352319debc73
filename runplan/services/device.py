"""Device scheduling clients.

A device client accepts a StructuredWorkout and a start datetime.
Scheduling is only attempted when the client reports AUTHORIZED; any
other state raises AuthorizationRequiredError before the device is
touched. Device rejections surface as SchedulingFailure.
"""

from datetime import date, datetime, time
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from loguru import logger

from runplan.config.settings import settings
from runplan.plans.errors import AuthorizationRequiredError, RunPlanError, SchedulingFailure
from runplan.plans.types import TimeOfDay
from runplan.workouts.exporters.base import WorkoutExporter
from runplan.workouts.exporters.fit_exporter import FitWorkoutExporter
from runplan.workouts.models import StructuredWorkout


class AuthorizationState(StrEnum):
    NOT_DETERMINED = "not_determined"
    AUTHORIZED = "authorized"
    DENIED = "denied"
    RESTRICTED = "restricted"


TIME_OF_DAY_HOURS: dict[TimeOfDay, int] = {
    TimeOfDay.MORNING: 7,
    TimeOfDay.AFTERNOON: 12,
    TimeOfDay.EVENING: 18,
}


def scheduled_start(workout_date: date, time_of_day: TimeOfDay, hour: int | None = None) -> datetime:
    """Start datetime for a workout on workout_date.

    An explicit hour overrides the preferred time of day.
    """
    return datetime.combine(workout_date, time(hour=hour if hour is not None else TIME_OF_DAY_HOURS[time_of_day]))


class DeviceSchedulingClient(Protocol):
    def authorization_state(self) -> AuthorizationState: ...

    def request_authorization(self) -> AuthorizationState: ...

    def schedule(self, workout: StructuredWorkout, start: datetime) -> None: ...


def schedule_structured_workout(client: DeviceSchedulingClient, workout: StructuredWorkout, start: datetime) -> None:
    """Schedule one workout, enforcing the authorization gate.

    Raises:
        AuthorizationRequiredError: If the client is not authorized
        SchedulingFailure: If the device rejects the workout
    """
    state = client.authorization_state()
    if state != AuthorizationState.AUTHORIZED:
        raise AuthorizationRequiredError(state.value)
    try:
        client.schedule(workout, start)
    except RunPlanError:
        raise
    except Exception as e:
        logger.error(f"Device rejected workout '{workout.display_name}' at {start.isoformat()}: {e}")
        raise SchedulingFailure(f"Device rejected workout '{workout.display_name}' at {start.isoformat()}") from e


class InMemoryDeviceScheduler:
    """Device client that records scheduled workouts in memory.

    Args:
        state: Initial authorization state
        grant_on_request: State reached after request_authorization when
            the current state is NOT_DETERMINED
    """

    def __init__(
        self,
        state: AuthorizationState = AuthorizationState.NOT_DETERMINED,
        grant_on_request: AuthorizationState = AuthorizationState.AUTHORIZED,
    ):
        self._state = state
        self._grant_on_request = grant_on_request
        self.scheduled: list[tuple[datetime, StructuredWorkout]] = []

    def authorization_state(self) -> AuthorizationState:
        return self._state

    def request_authorization(self) -> AuthorizationState:
        if self._state == AuthorizationState.NOT_DETERMINED:
            self._state = self._grant_on_request
        return self._state

    def schedule(self, workout: StructuredWorkout, start: datetime) -> None:
        self.scheduled.append((start, workout))


class FitFileDeviceScheduler:
    """Device client that writes each workout as a FIT file for device sync.

    Authorization means the export directory exists; requesting
    authorization creates it.
    """

    def __init__(self, export_dir: str | Path | None = None, exporter: WorkoutExporter | None = None):
        self.export_dir = Path(export_dir if export_dir is not None else settings.fit_export_dir)
        self.exporter = exporter or FitWorkoutExporter()

    def authorization_state(self) -> AuthorizationState:
        if self.export_dir.is_dir():
            return AuthorizationState.AUTHORIZED
        return AuthorizationState.NOT_DETERMINED

    def request_authorization(self) -> AuthorizationState:
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create FIT export directory {self.export_dir}: {e}")
            return AuthorizationState.DENIED
        return AuthorizationState.AUTHORIZED

    def file_path(self, workout: StructuredWorkout, start: datetime) -> Path:
        """First unused file name for the workout; existing files are never overwritten.

        Repeats of the same start and name get a numeric suffix
        (20250106-0700-easy-run-2.fit).
        """
        stem = f"{start:%Y%m%d-%H%M}-{'-'.join(workout.display_name.lower().split()) or 'workout'}"
        path = self.export_dir / f"{stem}{self.exporter.file_extension}"
        copy = 1
        while path.exists():
            copy += 1
            path = self.export_dir / f"{stem}-{copy}{self.exporter.file_extension}"
        return path

    def schedule(self, workout: StructuredWorkout, start: datetime) -> None:
        self.exporter.write(workout, self.file_path(workout, start))
