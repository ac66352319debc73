"""FIT file exporter for Garmin-compatible workout files.

Converts a StructuredWorkout into a FIT workout file. Blocks are unrolled:
each iteration of a block is written as its own sequence of steps.
"""

from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from typing import ClassVar

from fit_tool.fit_file_builder import FitFileBuilder
from fit_tool.profile.messages.file_id_message import FileIdMessage
from fit_tool.profile.messages.workout_message import WorkoutMessage
from fit_tool.profile.messages.workout_step_message import WorkoutStepMessage
from fit_tool.profile.profile_type import (
    FileType,
    Intensity,
    Manufacturer,
    Sport,
    WorkoutStepDuration,
    WorkoutStepTarget,
)
from garmin_fit_sdk import Decoder
from loguru import logger

from runplan.workouts.exporters.base import WorkoutExporter
from runplan.workouts.models import SpeedAlert, SpeedUnit, StepPurpose, StructuredWorkout, WorkoutGoal

MPH_TO_MPS = 0.44704
KMH_TO_MPS = 1 / 3.6


def speed_to_mps(speed: float, unit: SpeedUnit) -> float:
    if unit == SpeedUnit.MPH:
        return speed * MPH_TO_MPS
    return speed * KMH_TO_MPS


class FitWorkoutExporter(WorkoutExporter):
    """FIT file exporter for Garmin workouts."""

    export_type = "fit"
    file_extension = ".fit"

    INTENSITY_MAP: ClassVar[dict[StepPurpose, Intensity]] = {
        StepPurpose.WORK: Intensity.ACTIVE,
        StepPurpose.RECOVERY: Intensity.REST,
    }

    def __init__(self, created_at: datetime | None = None):
        self.created_at = created_at

    def _step_message(
        self,
        index: int,
        goal: WorkoutGoal,
        intensity: Intensity,
        alert: SpeedAlert | None = None,
        name: str | None = None,
    ) -> WorkoutStepMessage:
        step_msg = WorkoutStepMessage()
        step_msg.message_index = index

        seconds = goal.seconds
        meters = goal.meters
        if goal.kind == "time" and seconds is not None:
            step_msg.duration_type = WorkoutStepDuration.TIME
            step_msg.duration_time = float(seconds)
        elif goal.kind == "distance" and meters is not None:
            step_msg.duration_type = WorkoutStepDuration.DISTANCE
            step_msg.duration_distance = float(meters)
        else:
            raise ValueError(f"Unsupported goal for FIT export: {goal}")

        step_msg.intensity = intensity

        if alert is not None:
            # Custom speed targets are stored in mm/s
            step_msg.target_type = WorkoutStepTarget.SPEED
            step_msg.custom_target_value_low = int(max(0.0, speed_to_mps(alert.low, alert.unit)) * 1000)
            step_msg.custom_target_value_high = int(speed_to_mps(alert.high, alert.unit) * 1000)
        else:
            step_msg.target_type = WorkoutStepTarget.OPEN

        if name:
            step_msg.workout_step_name = name[:50]
        return step_msg

    def build(self, workout: StructuredWorkout) -> bytes:
        """Build FIT workout file from a structured workout.

        Args:
            workout: Compiled structured workout

        Returns:
            FIT file data as bytes

        Raises:
            ValueError: If the workout has no blocks or an unsupported goal
        """
        if not workout.blocks:
            raise ValueError("Workout must have at least one block")

        builder = FitFileBuilder(auto_define=True, min_string_size=50)

        created_at = self.created_at or datetime.now(timezone.utc)

        file_id_message = FileIdMessage()
        file_id_message.type = FileType.WORKOUT
        file_id_message.manufacturer = Manufacturer.DEVELOPMENT.value
        file_id_message.product = 0
        # fit_tool takes milliseconds since the Unix epoch
        file_id_message.time_created = round(created_at.timestamp() * 1000)
        file_id_message.serial_number = 0x12345678
        builder.add(file_id_message)

        step_messages: list[WorkoutStepMessage] = []
        if workout.warmup is not None:
            step_messages.append(
                self._step_message(len(step_messages), workout.warmup.goal, Intensity.WARMUP, name="Warmup")
            )
        for block in workout.blocks:
            for _ in range(block.iterations):
                for step in block.steps:
                    step_messages.append(
                        self._step_message(
                            len(step_messages),
                            step.goal,
                            self.INTENSITY_MAP[step.purpose],
                            alert=step.alert,
                            name=step.purpose.value.capitalize(),
                        )
                    )
        if workout.cooldown is not None:
            step_messages.append(
                self._step_message(len(step_messages), workout.cooldown.goal, Intensity.COOLDOWN, name="Cooldown")
            )

        workout_msg = WorkoutMessage()
        workout_msg.sport = Sport.RUNNING
        workout_msg.num_valid_steps = len(step_messages)
        workout_msg.workout_name = workout.display_name[:15]  # FIT limit is 15 chars
        builder.add(workout_msg)

        for step_msg in step_messages:
            builder.add(step_msg)

        fit_bytes = builder.build().to_bytes()

        try:
            decoder = Decoder(BytesIO(fit_bytes))
            decoder.read()
            logger.debug(f"Generated FIT file validated successfully ({len(fit_bytes)} bytes)")
        except Exception as e:
            logger.warning(f"Generated FIT file failed validation: {e}, but returning anyway")

        return fit_bytes
