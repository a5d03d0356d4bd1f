"""Mini README: Centralised configuration for the SkyAvoid planner.

Structure:
    * SkyAvoidSettings - pydantic-settings model for planner and service options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Every field can be overridden with a ``SKYAVOID_`` prefixed environment
    variable or a ``.env`` file, e.g. ``SKYAVOID_GOAL_BIAS=0.2``. The planner
    constants default to the values the avoidance search was tuned with.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SkyAvoidSettings(BaseSettings):
    """Runtime configuration for the avoidance planner and its interfaces."""

    model_config = SettingsConfigDict(
        env_prefix="SKYAVOID_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the planning service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the planning service exposes.",
        ge=1,
        le=65535,
    )
    obstacle_file: Optional[Path] = Field(
        None,
        description="GeoJSON file with obstacle footprints loaded by the service.",
    )
    coverage_file: Optional[Path] = Field(
        None,
        description="GeoJSON polygon whose bounding box limits where the planner may search.",
    )
    goal_bias: float = Field(
        0.3,
        description="Probability of sampling the literal target instead of a random point.",
        ge=0.0,
        le=1.0,
    )
    front_scale: float = Field(
        3.0,
        description="Front corner distance as a multiple of the start-to-target distance.",
        gt=0.0,
    )
    front_angle_deg: float = Field(
        45.0,
        description="Angle left and right of the heading at which the front corners lie.",
        gt=0.0,
        lt=90.0,
    )
    rear_angle_divisor: float = Field(
        2.0,
        description="Divisor applied to the front angle to shrink the rear of the space.",
        ge=1.0,
    )
    default_iterations: int = Field(
        1000,
        description="Iteration budget used when a caller does not supply one.",
        ge=0,
    )
    branch_length_m: Optional[float] = Field(
        None,
        description="Fixed branch length; defaults to the start-to-target distance.",
        gt=0.0,
    )
    random_seed: Optional[int] = Field(
        None,
        description="Seed for reproducible searches. Leave unset for entropy seeding.",
    )

    @field_validator("obstacle_file", "coverage_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[Union[str, Path]]) -> Optional[Path]:
        """Expand user directories in configured GeoJSON file paths."""

        if value in (None, ""):
            return None
        return Path(value).expanduser().resolve()

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache()
def get_settings() -> SkyAvoidSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return SkyAvoidSettings()
