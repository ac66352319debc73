"""Canonical plan schema.

Enumerations use stable snake_case wire values. Everything a generation
pass produces is frozen: a TrainingPlan is replaced as a whole, never
edited in place.

Units:
- duration is SECONDS
- distance is KILOMETERS
- pace is SECONDS PER KILOMETER on FitnessLevel, MINUTES PER KILOMETER
  everywhere in the interval compiler
"""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RunningGoal(StrEnum):
    BEGINNER_FITNESS = "beginner_fitness"
    COUCH_TO_5K = "couch_to_5k"
    RACE_TRAINING = "race_training"
    IMPROVE_PACE = "improve_pace"

    @property
    def title(self) -> str:
        return _GOAL_TITLES[self]


_GOAL_TITLES: dict[RunningGoal, str] = {
    RunningGoal.BEGINNER_FITNESS: "General Fitness",
    RunningGoal.COUCH_TO_5K: "Couch to 5K",
    RunningGoal.RACE_TRAINING: "Race Training",
    RunningGoal.IMPROVE_PACE: "Improve Pace",
}


class FitnessLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def recommended_distance_km(self) -> float:
        return _RECOMMENDED_DISTANCE_KM[self]

    @property
    def recommended_pace_sec_per_km(self) -> float:
        return _RECOMMENDED_PACE_SEC_PER_KM[self]

    @property
    def label(self) -> str:
        return _FITNESS_LABELS[self]

    @property
    def recommended_weekly_runs(self) -> str:
        return _RECOMMENDED_WEEKLY_RUNS[self]


_RECOMMENDED_DISTANCE_KM: dict[FitnessLevel, float] = {
    FitnessLevel.BEGINNER: 2.0,
    FitnessLevel.INTERMEDIATE: 5.0,
    FitnessLevel.ADVANCED: 10.0,
}

_RECOMMENDED_PACE_SEC_PER_KM: dict[FitnessLevel, float] = {
    FitnessLevel.BEGINNER: 7.0 * 60,
    FitnessLevel.INTERMEDIATE: 6.0 * 60,
    FitnessLevel.ADVANCED: 5.0 * 60,
}

_FITNESS_LABELS: dict[FitnessLevel, str] = {
    FitnessLevel.BEGINNER: "New to Running",
    FitnessLevel.INTERMEDIATE: "Run Occasionally",
    FitnessLevel.ADVANCED: "Regular Runner",
}

_RECOMMENDED_WEEKLY_RUNS: dict[FitnessLevel, str] = {
    FitnessLevel.BEGINNER: "2-3 runs per week",
    FitnessLevel.INTERMEDIATE: "3-4 runs per week",
    FitnessLevel.ADVANCED: "4-6 runs per week",
}


class Weekday(StrEnum):
    """Day of week with a single canonical ordinal (Monday=0 ... Sunday=6).

    The ordinal matches date.weekday(). Any other numbering belongs to an
    adapter at the system boundary (see runplan.calendar.adapters).
    """

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def ordinal(self) -> int:
        return _WEEKDAY_ORDER.index(self)

    @property
    def is_weekend(self) -> bool:
        return self in {Weekday.SATURDAY, Weekday.SUNDAY}

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Weekday":
        if not 0 <= ordinal <= 6:
            raise ValueError(f"Weekday ordinal must be 0-6, got {ordinal}")
        return _WEEKDAY_ORDER[ordinal]

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return _WEEKDAY_ORDER[day.weekday()]


_WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)


class TimeOfDay(StrEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class TrainingPhase(StrEnum):
    FOUNDATION = "foundation"
    DEVELOPMENT = "development"
    PEAK = "peak"


class WorkoutType(StrEnum):
    EASY = "easy"
    LONG_RUN = "long_run"
    TEMPO = "tempo"
    INTERVALS = "intervals"
    RECOVERY = "recovery"

    @property
    def title(self) -> str:
        return _WORKOUT_TITLES[self]

    @property
    def icon_name(self) -> str:
        return _WORKOUT_ICONS[self]


_WORKOUT_TITLES: dict[WorkoutType, str] = {
    WorkoutType.EASY: "Easy Run",
    WorkoutType.LONG_RUN: "Long Run",
    WorkoutType.TEMPO: "Tempo Run",
    WorkoutType.INTERVALS: "Interval Training",
    WorkoutType.RECOVERY: "Recovery Run",
}

_WORKOUT_ICONS: dict[WorkoutType, str] = {
    WorkoutType.EASY: "figure.run",
    WorkoutType.LONG_RUN: "arrow.right.circle",
    WorkoutType.TEMPO: "speedometer",
    WorkoutType.INTERVALS: "timer",
    WorkoutType.RECOVERY: "heart.circle",
}


class WorkoutIntensity(StrEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def label(self) -> str:
        return _INTENSITY_LABELS[self]


_INTENSITY_LABELS: dict[WorkoutIntensity, str] = {
    WorkoutIntensity.LOW: "Easy",
    WorkoutIntensity.MODERATE: "Moderate",
    WorkoutIntensity.HIGH: "Hard",
}


class PlanSpecification(BaseModel):
    """Caller-supplied request for a training plan.

    Invariants (end_date > start_date, at least one weekday, at least one
    whole week) are enforced by validate_plan_specification so that they
    surface as PlanValidationError rather than schema errors.

    Attributes:
        goal: Running goal
        fitness_level: Self-reported fitness level
        start_date: First day of the plan
        end_date: Target date (exclusive upper bound for workouts)
        weekday_set: Training weekdays, deduplicated and in canonical order
        preferred_time_of_day: When the runner prefers to train
        current_5k_time_sec: Optional current 5K time in seconds
        target_race_distance_km: Race distance, race_training only
        target_race_time_sec: Race goal time in seconds, race_training only
    """

    model_config = ConfigDict(frozen=True)

    goal: RunningGoal
    fitness_level: FitnessLevel
    start_date: date
    end_date: date
    weekday_set: tuple[Weekday, ...]
    preferred_time_of_day: TimeOfDay = TimeOfDay.MORNING
    current_5k_time_sec: float | None = Field(default=None, ge=0)
    target_race_distance_km: float | None = Field(default=None, ge=0)
    target_race_time_sec: float | None = Field(default=None, ge=0)

    @field_validator("weekday_set", mode="before")
    @classmethod
    def canonical_weekday_order(cls, value: object) -> object:
        """Deduplicate weekdays and order them Monday first."""
        if isinstance(value, (list, tuple, set, frozenset)):
            days = {Weekday(day) for day in value}
            return tuple(sorted(days, key=lambda day: day.ordinal))
        return value


class RunWalkPattern(BaseModel):
    """Run/walk minute pair used by couch-to-5K intervals."""

    model_config = ConfigDict(frozen=True)

    run_minutes: int = Field(gt=0)
    walk_minutes: int = Field(ge=0)


class WorkoutIntent(BaseModel):
    """Abstract, unscheduled description of a single workout.

    Attributes:
        workout_type: Kind of session
        duration_sec: Duration in seconds (>= 0)
        distance_km: Distance in kilometers, None when pace-dependent
        intensity: Coarse effort level
        description: Display text, not load-bearing
        run_walk: Run/walk pattern for run/walk interval sessions
    """

    model_config = ConfigDict(frozen=True)

    workout_type: WorkoutType
    duration_sec: float = Field(ge=0)
    distance_km: float | None = Field(default=None, ge=0)
    intensity: WorkoutIntensity
    description: str
    run_walk: RunWalkPattern | None = None


class PlannedWorkout(WorkoutIntent):
    """A workout intent pinned to an absolute calendar date."""

    date: date


class TrainingPlan(BaseModel):
    """Output of one generation pass plus identity and timestamps.

    Edits replace the whole workouts list (see TrainingPlan.with_workouts);
    nothing mutates a plan in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    name: str
    specification: PlanSpecification
    workouts: tuple[PlannedWorkout, ...]
    created_at: datetime
    updated_at: datetime

    def with_workouts(self, workouts: list[PlannedWorkout] | tuple[PlannedWorkout, ...], updated_at: datetime) -> "TrainingPlan":
        """Return a copy with the workout list replaced as a whole."""
        ordered = tuple(sorted(workouts, key=lambda workout: workout.date))
        return self.model_copy(update={"workouts": ordered, "updated_at": updated_at})
