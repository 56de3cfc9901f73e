"""Mini README: Flight metrics evaluator package.

Exports safe-speed, distance, duration and warning-level helpers along with
``evaluate_mission`` which bundles them for a planned waypoint sequence.
"""

from .evaluator import (
    FlightMetrics,
    WarningLevel,
    cruise_speed,
    evaluate_mission,
    forward_overlap_distance,
    max_safe_speed,
    minimum_leg_distance,
    mission_time,
    total_distance,
    warning_level,
)

__all__ = [
    "FlightMetrics",
    "WarningLevel",
    "cruise_speed",
    "evaluate_mission",
    "forward_overlap_distance",
    "max_safe_speed",
    "minimum_leg_distance",
    "mission_time",
    "total_distance",
    "warning_level",
]
