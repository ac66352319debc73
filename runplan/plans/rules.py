"""Workout rule table.

Maps (goal, phase) to a pure rule function; the rule function resolves the
remaining dimensions (weekday, fitness level, week number) to a
WorkoutIntent. The table is checked for totality at import time, so a goal
or phase without an entry fails loudly instead of defaulting.

Base values come from the fitness level:
- base distance = recommended distance (km)
- base duration = base distance x recommended pace (sec/km)
"""

from collections.abc import Callable
from dataclasses import dataclass
from itertools import product

from runplan.plans.errors import UnmappedRuleError
from runplan.plans.types import (
    FitnessLevel,
    RunningGoal,
    RunWalkPattern,
    TrainingPhase,
    Weekday,
    WorkoutIntensity,
    WorkoutIntent,
    WorkoutType,
)


@dataclass(frozen=True)
class RuleContext:
    """Inputs a rule function may use besides goal and phase."""

    phase: TrainingPhase
    weekday: Weekday
    fitness_level: FitnessLevel
    week_index: int = 0

    @property
    def base_distance_km(self) -> float:
        return self.fitness_level.recommended_distance_km

    @property
    def base_duration_sec(self) -> float:
        return self.base_distance_km * self.fitness_level.recommended_pace_sec_per_km


RuleFn = Callable[[RuleContext], WorkoutIntent]


def _scaled(
    ctx: RuleContext,
    workout_type: WorkoutType,
    factor: float,
    intensity: WorkoutIntensity,
    description: str,
) -> WorkoutIntent:
    return WorkoutIntent(
        workout_type=workout_type,
        duration_sec=ctx.base_duration_sec * factor,
        distance_km=ctx.base_distance_km * factor,
        intensity=intensity,
        description=description,
    )


# ---- Beginner fitness ----

def _beginner_fitness(
    workout_type: WorkoutType,
    factor: float,
    intensity: WorkoutIntensity,
    description: str,
) -> RuleFn:
    def rule(ctx: RuleContext) -> WorkoutIntent:
        if ctx.weekday.is_weekend:
            return _scaled(ctx, WorkoutType.LONG_RUN, 1.5, WorkoutIntensity.LOW, "Long Easy Run")
        return _scaled(ctx, workout_type, factor, intensity, description)

    return rule


# ---- Couch to 5K ----

# (run minutes, walk minutes, total minutes) per two-week bucket
COUCH_TO_5K_BUCKETS: tuple[tuple[int, int, int], ...] = (
    (1, 2, 30),
    (2, 2, 30),
    (3, 1, 35),
    (5, 1, 35),
    (8, 1, 40),
)


def couch_to_5k_bucket(week_index: int) -> tuple[int, int, int]:
    """Run/walk/total minutes for a 0-based week number."""
    if week_index < 0:
        raise ValueError(f"week_index must be >= 0, got {week_index}")
    return COUCH_TO_5K_BUCKETS[min(week_index // 2, len(COUCH_TO_5K_BUCKETS) - 1)]


def _couch_to_5k(ctx: RuleContext) -> WorkoutIntent:
    run_minutes, walk_minutes, total_minutes = couch_to_5k_bucket(ctx.week_index)
    return WorkoutIntent(
        workout_type=WorkoutType.INTERVALS,
        duration_sec=total_minutes * 60.0,
        distance_km=None,
        intensity=WorkoutIntensity.MODERATE,
        description=f"Run {run_minutes} min / Walk {walk_minutes} min",
        run_walk=RunWalkPattern(run_minutes=run_minutes, walk_minutes=walk_minutes),
    )


# ---- Race training ----

RACE_DISTANCE_MULTIPLIERS: dict[TrainingPhase, float] = {
    TrainingPhase.FOUNDATION: 0.6,
    TrainingPhase.DEVELOPMENT: 0.8,
    TrainingPhase.PEAK: 1.0,
}

RACE_PHASE_INTENSITY: dict[TrainingPhase, WorkoutIntensity] = {
    TrainingPhase.FOUNDATION: WorkoutIntensity.LOW,
    TrainingPhase.DEVELOPMENT: WorkoutIntensity.MODERATE,
    TrainingPhase.PEAK: WorkoutIntensity.HIGH,
}


def _race_training(midweek_quality: WorkoutType | None) -> RuleFn:
    def rule(ctx: RuleContext) -> WorkoutIntent:
        distance_km = RACE_DISTANCE_MULTIPLIERS[ctx.phase] * ctx.fitness_level.recommended_distance_km
        if ctx.weekday.is_weekend:
            workout_type = WorkoutType.LONG_RUN
            intensity = WorkoutIntensity.LOW
            description = "Race Prep Long Run"
        else:
            intensity = RACE_PHASE_INTENSITY[ctx.phase]
            if midweek_quality is not None and ctx.weekday == Weekday.WEDNESDAY:
                workout_type = midweek_quality
                description = "Race Pace Intervals" if midweek_quality == WorkoutType.INTERVALS else "Race Tempo Run"
            else:
                workout_type = WorkoutType.EASY
                description = "Race Base Run"
        return WorkoutIntent(
            workout_type=workout_type,
            duration_sec=distance_km * ctx.fitness_level.recommended_pace_sec_per_km,
            distance_km=distance_km,
            intensity=intensity,
            description=description,
        )

    return rule


# ---- Improve pace ----

IMPROVE_PACE_INTERVALS = WorkoutIntent(
    workout_type=WorkoutType.INTERVALS,
    duration_sec=45 * 60.0,
    distance_km=5.0,
    intensity=WorkoutIntensity.HIGH,
    description="Speed Intervals",
)


def _improve_pace(ctx: RuleContext) -> WorkoutIntent:
    if ctx.weekday == Weekday.SATURDAY:
        return _scaled(ctx, WorkoutType.LONG_RUN, 1.5, WorkoutIntensity.LOW, "Long Endurance Run")
    if ctx.phase == TrainingPhase.PEAK and ctx.weekday == Weekday.WEDNESDAY:
        return IMPROVE_PACE_INTERVALS
    return _scaled(ctx, WorkoutType.TEMPO, 1.0, WorkoutIntensity.MODERATE, "Pace Builder Tempo")


RULE_TABLE: dict[tuple[RunningGoal, TrainingPhase], RuleFn] = {
    (RunningGoal.BEGINNER_FITNESS, TrainingPhase.FOUNDATION): _beginner_fitness(
        WorkoutType.EASY, 1.0, WorkoutIntensity.LOW, "Base Building Run"
    ),
    (RunningGoal.BEGINNER_FITNESS, TrainingPhase.DEVELOPMENT): _beginner_fitness(
        WorkoutType.TEMPO, 1.2, WorkoutIntensity.MODERATE, "Steady Tempo Run"
    ),
    (RunningGoal.BEGINNER_FITNESS, TrainingPhase.PEAK): _beginner_fitness(
        WorkoutType.INTERVALS, 1.3, WorkoutIntensity.HIGH, "Fitness Intervals"
    ),
    (RunningGoal.COUCH_TO_5K, TrainingPhase.FOUNDATION): _couch_to_5k,
    (RunningGoal.COUCH_TO_5K, TrainingPhase.DEVELOPMENT): _couch_to_5k,
    (RunningGoal.COUCH_TO_5K, TrainingPhase.PEAK): _couch_to_5k,
    (RunningGoal.RACE_TRAINING, TrainingPhase.FOUNDATION): _race_training(None),
    (RunningGoal.RACE_TRAINING, TrainingPhase.DEVELOPMENT): _race_training(WorkoutType.TEMPO),
    (RunningGoal.RACE_TRAINING, TrainingPhase.PEAK): _race_training(WorkoutType.INTERVALS),
    (RunningGoal.IMPROVE_PACE, TrainingPhase.FOUNDATION): _improve_pace,
    (RunningGoal.IMPROVE_PACE, TrainingPhase.DEVELOPMENT): _improve_pace,
    (RunningGoal.IMPROVE_PACE, TrainingPhase.PEAK): _improve_pace,
}


def missing_rules(table: dict[tuple[RunningGoal, TrainingPhase], RuleFn]) -> list[tuple[RunningGoal, TrainingPhase]]:
    """List (goal, phase) keys with no rule function."""
    return [key for key in product(RunningGoal, TrainingPhase) if key not in table]


def _check_total(table: dict[tuple[RunningGoal, TrainingPhase], RuleFn]) -> None:
    missing = missing_rules(table)
    if missing:
        raise UnmappedRuleError(f"Rule table has no entry for: {missing}")


_check_total(RULE_TABLE)


def resolve_workout(
    goal: RunningGoal,
    phase: TrainingPhase,
    weekday: Weekday,
    fitness_level: FitnessLevel,
    week_index: int = 0,
) -> WorkoutIntent:
    """Resolve the workout intent for one training day.

    Args:
        goal: Running goal
        phase: Training phase of the week
        weekday: Day of the workout
        fitness_level: Runner fitness level
        week_index: 0-based week number (used by couch-to-5K progression)

    Returns:
        WorkoutIntent for the day

    Raises:
        UnmappedRuleError: If (goal, phase) has no rule (programming error)
    """
    try:
        rule = RULE_TABLE[(goal, phase)]
    except KeyError as e:
        raise UnmappedRuleError(f"No workout rule for goal={goal!r}, phase={phase!r}") from e
    return rule(RuleContext(phase=phase, weekday=weekday, fitness_level=fitness_level, week_index=week_index))
