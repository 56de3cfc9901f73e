"""Mini README: Local tangent-plane projection for planar path work.

Structure:
    * LocalTangentPlane - azimuthal-equidistant plane around an origin.

The sweep-line planner clips lines in metres, which is far simpler on a
plane. The projection is built purely from the kernel's ``distance``,
``bearing`` and ``destination`` so the plane and the sphere agree exactly
along every ray from the origin.
"""

from __future__ import annotations

import math
from typing import Iterable, List

import numpy as np

from .geodesy import bearing, destination, distance
from .primitives import GeoPoint


class LocalTangentPlane:
    """Map geographic points to ``(x east, y north)`` metres around ``origin``."""

    def __init__(self, origin: GeoPoint) -> None:
        self.origin = origin

    def to_plane(self, points: Iterable[GeoPoint]) -> np.ndarray:
        """Return an ``(N, 2)`` array of planar coordinates."""

        rows: List[List[float]] = []
        for point in points:
            radius = distance(self.origin, point)
            theta = math.radians(bearing(self.origin, point))
            rows.append([radius * math.sin(theta), radius * math.cos(theta)])
        return np.array(rows, dtype=float).reshape(-1, 2)

    def to_geo(self, x: float, y: float) -> GeoPoint:
        """Inverse projection of a single planar coordinate."""

        radius = math.hypot(x, y)
        if radius == 0.0:
            return self.origin
        return destination(self.origin, radius, math.degrees(math.atan2(x, y)))

    def to_geo_many(self, coordinates: np.ndarray) -> List[GeoPoint]:
        return [self.to_geo(float(x), float(y)) for x, y in np.asarray(coordinates).reshape(-1, 2)]
