"""Mini README: Geographic value types shared by every Waygen component.

Structure:
    * GeoPoint - immutable WGS84 longitude/latitude pair.
    * BoundaryPolygon - closed ring of ``GeoPoint`` describing a survey area.

Both types are plain frozen dataclasses so they can be hashed, copied into
results, and compared with ``is_close`` where floating-point tolerance
matters (ring closure, clipping).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

# Roughly a millimetre at the equator.
COORD_EPSILON = 1e-8


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Longitude/latitude pair in decimal degrees."""

    longitude: float
    latitude: float

    def is_close(self, other: "GeoPoint", tolerance: float = COORD_EPSILON) -> bool:
        """Return True when both coordinates agree within ``tolerance`` degrees."""

        return (
            abs(self.longitude - other.longitude) <= tolerance
            and abs(self.latitude - other.latitude) <= tolerance
        )

    def as_coordinates(self) -> List[float]:
        """GeoJSON ordering: ``[longitude, latitude]``."""

        return [self.longitude, self.latitude]

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[float]) -> "GeoPoint":
        if len(coordinates) < 2:
            raise ValueError("A coordinate needs at least longitude and latitude")
        longitude, latitude = float(coordinates[0]), float(coordinates[1])
        if not (math.isfinite(longitude) and math.isfinite(latitude)) or abs(latitude) > 90.0:
            raise ValueError(f"Coordinate ({longitude}, {latitude}) is outside WGS84 range")
        return cls(longitude=longitude, latitude=latitude)


@dataclass(frozen=True, slots=True)
class BoundaryPolygon:
    """Closed ring of points outlining the surveyed area.

    The ring is stored closed (first point repeated at the end). Simplicity
    is assumed rather than verified; planners report degenerate rings as
    diagnostics instead of failing.
    """

    ring: Tuple[GeoPoint, ...]

    @classmethod
    def from_points(cls, points: Iterable[GeoPoint]) -> "BoundaryPolygon":
        """Build a polygon, closing the ring when the caller left it open."""

        ring = list(points)
        if ring and not ring[0].is_close(ring[-1]):
            ring.append(ring[0])
        return cls(ring=tuple(ring))

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[Sequence[float]]) -> "BoundaryPolygon":
        return cls.from_points(GeoPoint.from_coordinates(pair) for pair in coordinates)

    @property
    def is_closed(self) -> bool:
        return len(self.ring) > 1 and self.ring[0].is_close(self.ring[-1])

    @property
    def vertices(self) -> List[GeoPoint]:
        """Distinct vertices, i.e. the ring without its closing point."""

        points = list(self.ring)
        if self.is_closed:
            points = points[:-1]
        distinct: List[GeoPoint] = []
        for point in points:
            if not distinct or not distinct[-1].is_close(point):
                distinct.append(point)
        return distinct

    def edges(self) -> List[Tuple[GeoPoint, GeoPoint]]:
        """Consecutive vertex pairs including the closing edge."""

        vertices = self.vertices
        if len(vertices) < 2:
            return []
        return [
            (vertices[index], vertices[(index + 1) % len(vertices)])
            for index in range(len(vertices))
        ]

    def as_coordinates(self) -> List[List[float]]:
        return [point.as_coordinates() for point in self.ring]
