"""Mini README: Utility helper functions for Waygen.

Exports GeoJSON conversion helpers and unit formatting used by the codec,
the CLI and the planning service.
"""

from .geojson import (
    boundary_from_geojson,
    boundary_to_feature,
    waypoint_to_feature,
    waypoints_to_feature_collection,
)
from .units import format_distance, format_duration, format_speed, to_display, to_metric

__all__ = [
    "boundary_from_geojson",
    "boundary_to_feature",
    "format_distance",
    "format_duration",
    "format_speed",
    "to_display",
    "to_metric",
    "waypoint_to_feature",
    "waypoints_to_feature_collection",
]
