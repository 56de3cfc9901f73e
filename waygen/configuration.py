"""Mini README: Centralised configuration models and helpers for Waygen.

Structure:
    * WaygenSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read planner tolerances, flight safety
    thresholds and service ports. Values may be overridden through
    ``WAYGEN_*`` environment variables or a ``.env`` file. The configuration
    is cached so validation happens only once per process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class WaygenSettings(BaseSettings):
    """Runtime configuration for the Waygen planning engine."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the planning service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the planning service exposes.",
        ge=1,
        le=65535,
    )
    flight_warning_threshold: float = Field(
        0.85,
        description="Fraction of the drone's max flight time at which missions are flagged.",
        gt=0.0,
        le=1.0,
    )
    takeoff_landing_overhead_seconds: float = Field(
        60.0,
        description="Fixed time added to every mission for takeoff, climb and landing.",
        ge=0.0,
    )
    min_segment_length_m: float = Field(
        1.0,
        description="Clipped sweep segments shorter than this are treated as corner artefacts.",
        ge=0.0,
    )
    straighten_tolerance_deg: float = Field(
        1.0,
        description="Bearing change below which consecutive legs count as collinear.",
        ge=0.0,
    )
    sweep_padding_m: float = Field(
        10.0,
        description="Distance sweep lines extend beyond the polygon before clipping.",
        ge=0.0,
    )

    class Config:
        env_prefix = "WAYGEN_"
        env_file = ".env"
        case_sensitive = False

    @validator("environment", pre=True)
    def _normalise_environment(cls, value: str) -> str:
        """Store environment labels in lower case so comparisons are stable."""

        return str(value).strip().lower()


@lru_cache()
def get_settings() -> WaygenSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return WaygenSettings()
