"""Mini README: Flight metrics and safety classification.

Structure:
    * WarningLevel - safe / warning / critical classification.
    * FlightMetrics - aggregated figures for one waypoint sequence.
    * total_distance, minimum_leg_distance, forward_overlap_distance,
      max_safe_speed, mission_time, warning_level - individual metrics.
    * cruise_speed - speed the planner stamps on generated waypoints.
    * evaluate_mission - compute everything for a mission in one call.

None of these functions raise. Division by zero, NaN and infinity are
clamped to 0 at the boundary of each computation so dashboards always get
a number. Thresholds and the takeoff/landing overhead come from
``WaygenSettings``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence

from ..configuration import get_settings
from ..geometry import distance, footprint_dimensions
from ..logging_utils import get_logger
from ..mission import MissionSettings, Waypoint
from ..profiles import DroneProfile

LOGGER = get_logger(__name__)


class WarningLevel(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class FlightMetrics:
    """Summary figures describing a planned mission."""

    waypoint_count: int
    total_distance: float
    minimum_leg_distance: float
    overlap_distance: float
    max_safe_speed: float
    mission_time_seconds: float
    max_flight_time_minutes: float
    warning_level: WarningLevel

    def as_dict(self) -> Dict[str, object]:
        return {
            "waypoint_count": self.waypoint_count,
            "total_distance": self.total_distance,
            "minimum_leg_distance": self.minimum_leg_distance,
            "overlap_distance": self.overlap_distance,
            "max_safe_speed": self.max_safe_speed,
            "mission_time_seconds": self.mission_time_seconds,
            "max_flight_time_minutes": self.max_flight_time_minutes,
            "warning_level": self.warning_level.value,
        }


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) and value > 0 else 0.0


def _leg_distances(waypoints: Sequence[Waypoint]) -> list:
    return [
        distance(waypoints[index].position, waypoints[index + 1].position)
        for index in range(len(waypoints) - 1)
    ]


def total_distance(waypoints: Sequence[Waypoint]) -> float:
    """Sum of consecutive leg lengths in metres."""

    return _finite_or_zero(sum(_leg_distances(waypoints)))


def minimum_leg_distance(waypoints: Sequence[Waypoint]) -> float:
    """Shortest consecutive leg in metres (0 for fewer than two waypoints)."""

    legs = _leg_distances(waypoints)
    return _finite_or_zero(min(legs)) if legs else 0.0


def forward_overlap_distance(altitude: float, horizontal_fov: float, front_overlap: float) -> float:
    """Forward travel between photos that keeps the requested front overlap."""

    if not altitude or not horizontal_fov:
        return 0.0
    _, height = footprint_dimensions(altitude, horizontal_fov)
    return _finite_or_zero(height * (1 - front_overlap / 100))


def max_safe_speed(
    waypoints: Sequence[Waypoint],
    photo_cadence: float,
    overlap_distance: Optional[float] = None,
) -> float:
    """Fastest speed that still leaves one photo opportunity per leg.

    The bound is the shortest leg divided by the camera cadence. When an
    ``overlap_distance`` is given the lesser of it and the shortest leg is
    used, so front overlap is honoured between widely spaced waypoints too.
    """

    if len(waypoints) < 2 or not photo_cadence or photo_cadence <= 0:
        return 0.0
    bound = minimum_leg_distance(waypoints)
    if overlap_distance is not None and overlap_distance > 0:
        bound = min(bound, overlap_distance)
    return _finite_or_zero(bound / photo_cadence)


def cruise_speed(
    waypoints: Sequence[Waypoint],
    settings: MissionSettings,
    profile: DroneProfile,
) -> float:
    """Speed to fly ``waypoints`` at: the safe speed, or ``settings.speed`` when none exists."""

    overlap = forward_overlap_distance(settings.altitude, profile.horizontal_fov, settings.front_overlap)
    safe = max_safe_speed(waypoints, profile.photo_cadence, overlap)
    return safe if safe > 0 else settings.speed


def mission_time(
    total_distance_m: float,
    speed: float,
    overhead_seconds: Optional[float] = None,
) -> float:
    """Transit time plus takeoff/landing overhead, rounded to the second."""

    overhead = get_settings().takeoff_landing_overhead_seconds if overhead_seconds is None else overhead_seconds
    if not speed or speed <= 0 or not math.isfinite(speed):
        return overhead
    transit = _finite_or_zero(total_distance_m) / speed
    return float(round(transit + overhead))


def warning_level(
    mission_time_seconds: float,
    max_flight_time_minutes: float,
    threshold: Optional[float] = None,
) -> WarningLevel:
    """Classify mission time against the drone's endurance."""

    if not max_flight_time_minutes or max_flight_time_minutes <= 0:
        return WarningLevel.SAFE
    ratio = get_settings().flight_warning_threshold if threshold is None else threshold
    limit_seconds = max_flight_time_minutes * 60
    if mission_time_seconds >= limit_seconds:
        return WarningLevel.CRITICAL
    if mission_time_seconds >= limit_seconds * ratio:
        return WarningLevel.WARNING
    return WarningLevel.SAFE


def evaluate_mission(
    waypoints: Sequence[Waypoint],
    settings: MissionSettings,
    profile: Optional[DroneProfile] = None,
) -> FlightMetrics:
    """Compute every flight metric for ``waypoints`` flown with ``settings``."""

    profile = profile or settings.drone_profile()
    total = total_distance(waypoints)
    overlap = forward_overlap_distance(settings.altitude, profile.horizontal_fov, settings.front_overlap)
    speed = max_safe_speed(waypoints, profile.photo_cadence, overlap)
    duration = mission_time(total, speed)
    level = warning_level(duration, profile.max_flight_time)
    LOGGER.info(
        "Mission metrics -> waypoints: %s distance: %.1f m speed: %.2f m/s time: %.0f s level: %s",
        len(waypoints),
        total,
        speed,
        duration,
        level.value,
    )
    return FlightMetrics(
        waypoint_count=len(waypoints),
        total_distance=total,
        minimum_leg_distance=minimum_leg_distance(waypoints),
        overlap_distance=overlap,
        max_safe_speed=speed,
        mission_time_seconds=duration,
        max_flight_time_minutes=profile.max_flight_time,
        warning_level=level,
    )
