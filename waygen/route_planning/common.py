"""Mini README: Shared helpers for the grid and orbit planners.

Structure:
    * planar_boundary - project a boundary to a shapely polygon in metres.
    * assign_headings - outgoing-leg headings with optional yaw locking.
    * straighten - drop interior points on near-collinear runs.
    * build_waypoints - stamp settings-derived fields onto positions.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

from ..errors import InvalidGeometryError
from ..geometry import BoundaryPolygon, GeoPoint, LocalTangentPlane, bearing, bearing_difference
from ..mission import MissionSettings, Waypoint

MIN_POLYGON_AREA_M2 = 1e-3


def planar_boundary(boundary: Optional[BoundaryPolygon]) -> Tuple[LocalTangentPlane, Polygon, List[GeoPoint]]:
    """Return the projection, planar polygon and distinct vertices of ``boundary``.

    Raises ``InvalidGeometryError`` for missing rings, rings with fewer than
    three distinct vertices, and rings enclosing no area.
    """

    if boundary is None:
        raise InvalidGeometryError("No boundary polygon supplied")
    vertices = boundary.vertices
    if len(vertices) < 3:
        raise InvalidGeometryError(
            f"Boundary needs at least 3 distinct vertices, got {len(vertices)}"
        )
    origin = GeoPoint(
        longitude=float(np.mean([point.longitude for point in vertices])),
        latitude=float(np.mean([point.latitude for point in vertices])),
    )
    plane = LocalTangentPlane(origin)
    polygon = Polygon(plane.to_plane(vertices))
    if polygon.area < MIN_POLYGON_AREA_M2:
        raise InvalidGeometryError("Boundary polygon has zero area")
    return plane, polygon, vertices


def assign_headings(positions: Sequence[GeoPoint], *, lock_to_first_leg: bool) -> List[float]:
    """Heading of the outgoing leg at each point; the last point keeps its incoming leg."""

    count = len(positions)
    if count < 2:
        return [0.0] * count
    legs = [bearing(positions[index], positions[index + 1]) for index in range(count - 1)]
    if lock_to_first_leg:
        return [legs[0]] * count
    return legs + [legs[-1]]


def straighten(positions: Sequence[GeoPoint], tolerance_deg: float) -> List[GeoPoint]:
    """Collapse runs of near-collinear points to their endpoints."""

    if len(positions) < 3:
        return list(positions)
    kept = [positions[0]]
    for index in range(1, len(positions) - 1):
        incoming = bearing(kept[-1], positions[index])
        outgoing = bearing(positions[index], positions[index + 1])
        if bearing_difference(incoming, outgoing) >= tolerance_deg:
            kept.append(positions[index])
    kept.append(positions[-1])
    return kept


def build_waypoints(
    positions: Sequence[GeoPoint],
    headings: Sequence[float],
    settings: MissionSettings,
) -> List[Waypoint]:
    return [
        Waypoint(
            position=position,
            altitude=settings.altitude,
            speed=settings.speed,
            gimbal_pitch=settings.gimbal_pitch,
            heading=heading,
            camera_action=settings.waypoint_action,
        )
        for position, heading in zip(positions, headings)
    ]
