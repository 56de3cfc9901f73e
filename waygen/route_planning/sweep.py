"""Mini README: Boustrophedon ("lawnmower") sweep generation.

Structure:
    * SweepSegment - one clipped piece of a sweep line in planar metres.
    * dominant_edge_angle - sweep bearing following the longest boundary edge.
    * sweep_segments - build and clip parallel lines against the polygon.
    * boustrophedon_positions - order segments and emit planar waypoints.

Lines are laid out in a local tangent plane. The sweep angle is the bearing
of the flight lines: ``direction`` points along a line and ``normal`` points
to the next line. Offsets are centred in the polygon's extent along
``normal`` so the outermost lines sit half a spacing (or less) inside the
boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np
from shapely.errors import GEOSException
from shapely.geometry import LineString, Polygon
from shapely.geometry.base import BaseGeometry

from ..errors import InvalidGeometryError
from ..geometry import BoundaryPolygon, bearing, distance
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class SweepSegment:
    """Clipped piece of sweep line ``line_index`` between two along-track offsets."""

    line_index: int
    start: np.ndarray
    end: np.ndarray

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    def flipped(self) -> "SweepSegment":
        return SweepSegment(self.line_index, self.end, self.start)


def sweep_axes(sweep_angle: float) -> Tuple[np.ndarray, np.ndarray]:
    """Unit vectors ``(direction, normal)`` for a sweep bearing in degrees."""

    theta = math.radians(sweep_angle)
    direction = np.array([math.sin(theta), math.cos(theta)])
    normal = np.array([math.cos(theta), -math.sin(theta)])
    return direction, normal


def dominant_edge_angle(boundary: BoundaryPolygon) -> float:
    """Bearing of the longest boundary edge, folded into [0, 180)."""

    edges = boundary.edges()
    if not edges:
        return 0.0
    start, end = max(edges, key=lambda edge: distance(edge[0], edge[1]))
    return bearing(start, end) % 180.0


def _line_pieces(geometry: BaseGeometry) -> List[LineString]:
    """Flatten an intersection result into its line components."""

    if geometry.is_empty:
        return []
    if geometry.geom_type == "LineString":
        return [geometry]
    if geometry.geom_type in {"MultiLineString", "GeometryCollection"}:
        pieces: List[LineString] = []
        for part in geometry.geoms:
            pieces.extend(_line_pieces(part))
        return pieces
    # Points and other zero-length touches carry no sweep.
    return []


def sweep_segments(
    polygon: Polygon,
    *,
    sweep_angle: float,
    spacing: float,
    padding: float,
    min_segment_length: float,
) -> List[SweepSegment]:
    """Clip evenly spaced parallel lines against ``polygon``."""

    direction, normal = sweep_axes(sweep_angle)
    exterior = np.asarray(polygon.exterior.coords)
    along = exterior @ direction
    across = exterior @ normal

    extent = float(across.max() - across.min())
    line_count = max(1, math.ceil(extent / spacing))
    first_offset = float(across.min()) + (extent - (line_count - 1) * spacing) / 2
    along_min = float(along.min()) - padding
    along_max = float(along.max()) + padding
    LOGGER.debug(
        "Sweep angle=%.2f spacing=%.2f extent=%.2f lines=%s",
        sweep_angle,
        spacing,
        extent,
        line_count,
    )

    segments: List[SweepSegment] = []
    discarded = 0
    for line_index in range(line_count):
        offset = first_offset + line_index * spacing
        line = LineString(
            [offset * normal + along_min * direction, offset * normal + along_max * direction]
        )
        try:
            clipped = polygon.intersection(line)
        except GEOSException as error:
            raise InvalidGeometryError(f"Boundary polygon could not be clipped: {error}") from error
        for piece in _line_pieces(clipped):
            coords = np.asarray(piece.coords)
            start, end = coords[0], coords[-1]
            if float(start @ direction) > float(end @ direction):
                start, end = end, start
            segment = SweepSegment(line_index, start, end)
            if segment.length < min_segment_length:
                discarded += 1
                continue
            segments.append(segment)
    if discarded:
        LOGGER.debug("Discarded %s sweep fragments shorter than %.2f m", discarded, min_segment_length)
    return segments


def _interpolate(segment: SweepSegment, photo_spacing: float) -> List[np.ndarray]:
    """Endpoints plus evenly spaced interior points no further apart than ``photo_spacing``."""

    steps = max(1, math.ceil(segment.length / photo_spacing - 1e-9))
    return [segment.start + (segment.end - segment.start) * (k / steps) for k in range(steps + 1)]


def boustrophedon_positions(
    segments: Sequence[SweepSegment],
    sweep_angle: float,
    *,
    photo_spacing: float = 0.0,
) -> List[np.ndarray]:
    """Order segments line by line, alternating travel direction each line.

    When ``photo_spacing`` is positive every segment is subdivided so that
    consecutive points along it are at most that far apart.
    """

    direction, _ = sweep_axes(sweep_angle)
    rows: Dict[int, List[SweepSegment]] = {}
    for segment in segments:
        rows.setdefault(segment.line_index, []).append(segment)

    positions: List[np.ndarray] = []
    forward = True
    for line_index in sorted(rows):
        row = sorted(rows[line_index], key=lambda segment: float(segment.start @ direction))
        if not forward:
            row = [segment.flipped() for segment in reversed(row)]
        for segment in row:
            if photo_spacing > 0:
                positions.extend(_interpolate(segment, photo_spacing))
            else:
                positions.extend([segment.start, segment.end])
        forward = not forward
    return positions
