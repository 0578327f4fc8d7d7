"""Engine configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FOODDISPATCH_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    average_speed_kmh: float = Field(
        default=20.0,
        gt=0.0,
        description="Average urban two-wheeler speed used for delivery estimates.",
    )
    delivery_buffer_minutes: int = Field(
        default=5,
        ge=0,
        description="Fixed minutes added to every estimate for parking and hand-off.",
    )
    earth_radius_km: float = Field(default=6371.0, gt=0.0)
    ranking_method: Literal["lexicographic", "weighted"] = Field(
        default="lexicographic",
        description="Ranking strategy applied to recommendation candidates.",
    )
    ranking_weights: tuple[float, ...] = Field(
        default=(0.40, 0.35, 0.25),
        description="Time, rating and distance weights for the weighted ranking strategy.",
    )
    dispatch_prefilter: Literal["none", "bounding_box"] = Field(default="none")
    dispatch_prefilter_radius_km: float = Field(default=5.0, gt=0.0)
    max_assignment_attempts: int = Field(default=3, ge=1)

    @field_validator("ranking_weights", mode="before")
    @classmethod
    def _parse_float_tuple_from_env(cls, value: Any) -> tuple[float, ...]:
        """Parse float tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(float(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(float(item) for item in parsed)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            if "," in value:
                return tuple(float(item.strip()) for item in value.split(",") if item.strip())
        raise ValueError("ranking_weights must provide time, rating and distance weights")

    @field_validator("ranking_weights")
    @classmethod
    def _check_weight_count(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if len(value) != 3:
            raise ValueError("ranking_weights must contain exactly 3 values")
        if any(weight < 0 for weight in value):
            raise ValueError("ranking_weights must be >= 0")
        return value


settings = Settings()
