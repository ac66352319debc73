import os
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues."""
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "runplan.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.info(f"Using default database path: {db_url}")
    return db_url


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    default_warmup_minutes: float = Field(
        default=5.0,
        validation_alias="DEFAULT_WARMUP_MINUTES",
        description="Warmup length attached to compiled interval workouts",
    )
    default_cooldown_minutes: float = Field(
        default=5.0,
        validation_alias="DEFAULT_COOLDOWN_MINUTES",
        description="Cooldown length attached to compiled interval workouts",
    )
    device_units: Literal["imperial", "metric"] = Field(
        default="imperial",
        validation_alias="DEVICE_UNITS",
        description="Unit system expected by the device scheduling target",
    )
    fit_export_dir: str = Field(
        default="fit_exports",
        validation_alias="FIT_EXPORT_DIR",
        description="Directory the FIT file scheduler writes workouts to",
    )
    default_workout_hour: int | None = Field(
        default=None,
        validation_alias="DEFAULT_WORKOUT_HOUR",
        description="Hour of day workouts are scheduled at; derived from preferred time of day when unset",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("default_warmup_minutes", "default_cooldown_minutes")
    @classmethod
    def validate_segment_minutes(cls, value: float) -> float:
        """Warmup and cooldown lengths cannot be negative."""
        if value < 0:
            raise ValueError(f"Segment length must be >= 0 minutes, got {value}")
        return value

    @field_validator("default_workout_hour")
    @classmethod
    def validate_workout_hour(cls, value: int | None) -> int | None:
        if value is not None and not 0 <= value <= 23:
            raise ValueError(f"DEFAULT_WORKOUT_HOUR must be between 0 and 23, got {value}")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
