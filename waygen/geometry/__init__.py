"""Mini README: Geometry kernel for Waygen.

Exports the geographic value types, spherical geodesy helpers, the local
tangent-plane projection used by planners, and camera footprint projection.
Nothing in this package depends on the rest of Waygen besides logging.
"""

from .footprint import Footprint, calculate_footprint, footprint_dimensions, vertical_fov
from .geodesy import (
    EARTH_RADIUS_M,
    bearing,
    bearing_difference,
    destination,
    distance,
    midpoint,
    normalise_bearing,
)
from .primitives import COORD_EPSILON, BoundaryPolygon, GeoPoint
from .projection import LocalTangentPlane

__all__ = [
    "BoundaryPolygon",
    "COORD_EPSILON",
    "EARTH_RADIUS_M",
    "Footprint",
    "GeoPoint",
    "LocalTangentPlane",
    "bearing",
    "bearing_difference",
    "calculate_footprint",
    "destination",
    "distance",
    "footprint_dimensions",
    "midpoint",
    "normalise_bearing",
    "vertical_fov",
]
