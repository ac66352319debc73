"""Exporter interface for structured workouts.

An exporter turns a compiled StructuredWorkout into the bytes of one file
format; `write` places those bytes on disk with the format's extension.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from runplan.workouts.models import StructuredWorkout


class WorkoutExporter(ABC):
    export_type: str
    file_extension: str

    @abstractmethod
    def build(self, workout: StructuredWorkout) -> bytes:
        """Serialize a structured workout.

        Raises:
            ValueError: If the workout cannot be represented in this format
        """
        raise NotImplementedError

    def write(self, workout: StructuredWorkout, path: str | Path) -> Path:
        """Build the workout and write it to path, adding the extension if missing.

        Returns:
            The path written
        """
        target = Path(path)
        if target.suffix.lower() != self.file_extension:
            target = target.with_name(target.name + self.file_extension)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.build(workout))
        logger.info("Exported workout", export_type=self.export_type, path=str(target), name=workout.display_name)
        return target
