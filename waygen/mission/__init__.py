"""Mini README: Mission data model package.

Re-exports the waypoint record, the settings snapshot and the option enums
so planners, the metrics evaluator and the codec share one vocabulary.
"""

from .models import (
    CameraAction,
    MissionEndAction,
    MissionSettings,
    OrbitDirection,
    PathType,
    RCLostAction,
    UnitSystem,
    Waypoint,
    new_waypoint_id,
)

__all__ = [
    "CameraAction",
    "MissionEndAction",
    "MissionSettings",
    "OrbitDirection",
    "PathType",
    "RCLostAction",
    "UnitSystem",
    "Waypoint",
    "new_waypoint_id",
]
