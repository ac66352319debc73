"""Structured workout schema - device-schedulable interval workouts.

A StructuredWorkout is:
- optional warmup (time goal)
- one or more interval blocks, each a list of steps repeated N times
- optional cooldown (time goal)
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from runplan.workouts.conversion import miles_to_km


class StepPurpose(StrEnum):
    WORK = "work"
    RECOVERY = "recovery"


class GoalUnit(StrEnum):
    MILES = "miles"
    KILOMETERS = "kilometers"
    METERS = "meters"
    SECONDS = "seconds"
    MINUTES = "minutes"


class SpeedUnit(StrEnum):
    MPH = "mph"
    KMH = "kmh"


@dataclass(frozen=True)
class WorkoutInterval:
    """Caller-facing interval description.

    Attributes:
        purpose: Work or recovery
        distance_km: Interval distance in kilometers (> 0)
        target_pace_range: Closed (low, high) pace range in min/km
        iterations: Repeat count (>= 1)
    """

    purpose: StepPurpose
    distance_km: float
    target_pace_range: tuple[float, float]
    iterations: int = 1


@dataclass(frozen=True)
class WorkoutGoal:
    kind: Literal["distance", "time"]
    value: float
    unit: GoalUnit

    @classmethod
    def distance(cls, value: float, unit: GoalUnit) -> "WorkoutGoal":
        return cls(kind="distance", value=value, unit=unit)

    @classmethod
    def time(cls, value: float, unit: GoalUnit) -> "WorkoutGoal":
        return cls(kind="time", value=value, unit=unit)

    @property
    def seconds(self) -> float | None:
        if self.unit == GoalUnit.SECONDS:
            return self.value
        if self.unit == GoalUnit.MINUTES:
            return self.value * 60
        return None

    @property
    def meters(self) -> float | None:
        if self.unit == GoalUnit.METERS:
            return self.value
        if self.unit == GoalUnit.KILOMETERS:
            return self.value * 1000
        if self.unit == GoalUnit.MILES:
            return miles_to_km(self.value) * 1000
        return None


@dataclass(frozen=True)
class SpeedAlert:
    """Target speed band; the device alerts outside [low, high]."""

    low: float
    high: float
    unit: SpeedUnit

    @property
    def target(self) -> float:
        return (self.low + self.high) / 2


@dataclass(frozen=True)
class IntervalStep:
    purpose: StepPurpose
    goal: WorkoutGoal
    alert: SpeedAlert | None = None


@dataclass(frozen=True)
class IntervalBlock:
    steps: tuple[IntervalStep, ...]
    iterations: int = 1


@dataclass(frozen=True)
class WorkoutStep:
    """Single open step used for warmup and cooldown."""

    goal: WorkoutGoal


@dataclass(frozen=True)
class StructuredWorkout:
    display_name: str
    blocks: tuple[IntervalBlock, ...]
    warmup: WorkoutStep | None = None
    cooldown: WorkoutStep | None = None
    activity: str = "running"
    location: str = "outdoor"

    @property
    def segments(self) -> list[WorkoutStep | IntervalBlock]:
        """Warmup, blocks and cooldown in execution order."""
        ordered: list[WorkoutStep | IntervalBlock] = []
        if self.warmup is not None:
            ordered.append(self.warmup)
        ordered.extend(self.blocks)
        if self.cooldown is not None:
            ordered.append(self.cooldown)
        return ordered
