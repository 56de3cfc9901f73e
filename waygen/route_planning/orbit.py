"""Mini README: Circular orbit path generation.

The orbit is centred on the polygon's area centroid with a radius equal to
the mean distance from that centroid to the boundary vertices. Points are
spaced ``spacing`` metres apart along the circle, starting at
``start_angle`` and walking clockwise (increasing bearing) or
counter-clockwise. Every heading faces the centre.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from shapely.geometry import Polygon

from ..errors import InvalidConfigurationError, InvalidGeometryError
from ..geometry import GeoPoint, LocalTangentPlane, bearing, destination, distance, normalise_bearing
from ..logging_utils import get_logger
from ..mission import OrbitDirection

LOGGER = get_logger(__name__)

MIN_ORBIT_RADIUS_M = 0.01


def orbit_centre_and_radius(
    plane: LocalTangentPlane, polygon: Polygon, vertices: List[GeoPoint]
) -> Tuple[GeoPoint, float]:
    centroid = polygon.centroid
    centre = plane.to_geo(centroid.x, centroid.y)
    radius = sum(distance(centre, vertex) for vertex in vertices) / len(vertices)
    return centre, radius


def orbit_positions(
    centre: GeoPoint,
    radius: float,
    *,
    spacing: float,
    start_angle: float,
    direction: OrbitDirection,
) -> Tuple[List[GeoPoint], List[float]]:
    """Return orbit positions and their inward-facing headings."""

    if radius < MIN_ORBIT_RADIUS_M:
        raise InvalidGeometryError("Orbit radius is zero; boundary is degenerate")
    if not math.isfinite(spacing) or spacing <= 0:
        raise InvalidConfigurationError(f"Orbit spacing must be positive, got {spacing}")
    if not math.isfinite(start_angle):
        raise InvalidConfigurationError(f"Orbit start angle must be finite, got {start_angle}")

    step = math.degrees(spacing / radius)
    count = max(1, math.ceil(360.0 / step - 1e-9))
    sign = 1.0 if direction == OrbitDirection.CLOCKWISE else -1.0
    LOGGER.debug(
        "Orbit radius=%.2f m step=%.3f deg points=%s direction=%s",
        radius,
        step,
        count,
        direction.value,
    )

    positions: List[GeoPoint] = []
    headings: List[float] = []
    for index in range(count):
        angle = normalise_bearing(start_angle + sign * index * step)
        position = destination(centre, radius, angle)
        positions.append(position)
        headings.append(bearing(position, centre))
    return positions, headings
