"""Mini README: Ground footprint projection for a pinhole survey camera.

Structure:
    * Footprint - closed 4-corner ground ring plus the pose that produced it.
    * footprint_dimensions - nadir footprint width/height in metres.
    * calculate_footprint - project the four frame corners onto flat ground.

The camera frame uses x right, y up, z forward. Gimbal pitch rotates that
frame about the x axis into the drone body frame (x right, y forward, z up),
after which each corner ray is intersected with the plane ``z = -altitude``.
Rays at or above the horizon are clamped to ``altitude * 10`` so oblique
shots still render as finite polygons.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from ..logging_utils import get_logger
from .geodesy import destination
from .primitives import GeoPoint

LOGGER = get_logger(__name__)

ASPECT_RATIO = 4 / 3
DEFAULT_HFOV = 82.1
HORIZON_EPSILON = -0.001
MAX_RANGE_FACTOR = 10.0


@dataclass(frozen=True, slots=True)
class Footprint:
    """Ground area visible in a single photo."""

    ring: Tuple[GeoPoint, ...]
    altitude: float
    heading: float
    horizontal_fov: float
    pitch: float

    def to_geojson(self) -> Dict:
        """Return a GeoJSON Feature suitable for map overlays."""

        return {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[point.as_coordinates() for point in self.ring]],
            },
            "properties": {
                "altitude": self.altitude,
                "heading": self.heading,
                "hfov": self.horizontal_fov,
                "pitch": self.pitch,
            },
        }


def vertical_fov(horizontal_fov: float, aspect_ratio: float = ASPECT_RATIO) -> float:
    """Vertical field of view in degrees for the given horizontal one."""

    half = math.tan(math.radians(horizontal_fov) / 2) / aspect_ratio
    return math.degrees(2 * math.atan(half))


def footprint_dimensions(altitude: float, horizontal_fov: float) -> Tuple[float, float]:
    """Return ``(width, height)`` in metres of a nadir photo."""

    width = 2 * altitude * math.tan(math.radians(horizontal_fov) / 2)
    return width, width / ASPECT_RATIO


def _pitch_rotation(gimbal_pitch: float) -> np.ndarray:
    pitch = math.radians(gimbal_pitch)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, -math.sin(pitch), math.cos(pitch)],
            [0.0, math.cos(pitch), math.sin(pitch)],
        ]
    )


def calculate_footprint(
    center: Optional[GeoPoint],
    altitude: Optional[float],
    heading: float,
    horizontal_fov: Optional[float],
    gimbal_pitch: float = -90.0,
) -> Optional[Footprint]:
    """Project the camera frame onto the ground around ``center``.

    Returns ``None`` when ``center``, ``altitude`` or ``horizontal_fov`` is
    missing or zero; callers are expected to check those before asking.
    """

    if center is None or not altitude or not horizontal_fov:
        return None

    half_h = math.tan(math.radians(horizontal_fov) / 2)
    half_v = math.tan(math.radians(vertical_fov(horizontal_fov)) / 2)
    # Order: top-right, bottom-right, bottom-left, top-left.
    corners_camera = np.array(
        [
            [half_h, half_v, 1.0],
            [half_h, -half_v, 1.0],
            [-half_h, -half_v, 1.0],
            [-half_h, half_v, 1.0],
        ]
    )
    corners_body = corners_camera @ _pitch_rotation(gimbal_pitch).T
    max_range = altitude * MAX_RANGE_FACTOR

    ring = []
    for rx, ry, rz in corners_body:
        angle = math.degrees(math.atan2(rx, ry))
        if rz >= HORIZON_EPSILON:
            ground_range = max_range
        else:
            t = -altitude / rz
            ground_range = min(math.hypot(t * rx, t * ry), max_range)
        ring.append(destination(center, ground_range, heading + angle))
    ring.append(ring[0])

    LOGGER.debug(
        "Footprint at %s alt=%s heading=%s hfov=%s pitch=%s",
        center,
        altitude,
        heading,
        horizontal_fov,
        gimbal_pitch,
    )
    return Footprint(
        ring=tuple(ring),
        altitude=altitude,
        heading=heading,
        horizontal_fov=horizontal_fov,
        pitch=gimbal_pitch,
    )
