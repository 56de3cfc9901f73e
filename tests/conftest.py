"""Mini README: Shared fixtures for the Waygen test-suite.

Boundaries are built in a local tangent plane around a fixed London origin
so tests can reason in metres while the planners see real coordinates.
"""

from __future__ import annotations

import math
from typing import Iterable, Tuple

import pytest

from waygen.geometry import BoundaryPolygon, GeoPoint, LocalTangentPlane

ORIGIN = GeoPoint(longitude=-0.1285, latitude=51.5007)


def boundary_from_plane(points: Iterable[Tuple[float, float]], origin: GeoPoint = ORIGIN) -> BoundaryPolygon:
    plane = LocalTangentPlane(origin)
    return BoundaryPolygon.from_points(plane.to_geo(x, y) for x, y in points)


def square(side: float = 100.0) -> BoundaryPolygon:
    half = side / 2
    return boundary_from_plane([(-half, -half), (half, -half), (half, half), (-half, half)])


def circle(radius: float = 50.0, vertices: int = 72) -> BoundaryPolygon:
    return boundary_from_plane(
        (
            radius * math.sin(2 * math.pi * index / vertices),
            radius * math.cos(2 * math.pi * index / vertices),
        )
        for index in range(vertices)
    )


@pytest.fixture
def square_boundary() -> BoundaryPolygon:
    return square()


@pytest.fixture
def circle_boundary() -> BoundaryPolygon:
    return circle()
