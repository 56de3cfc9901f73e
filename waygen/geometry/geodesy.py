"""Mini README: Spherical-earth geodesy primitives.

Structure:
    * distance - great-circle distance in metres (geopy on the mean sphere).
    * bearing - initial bearing in degrees, always within [0, 360).
    * destination - point reached by travelling a distance along a bearing.
    * midpoint - halfway point between two locations.
    * normalise_bearing / bearing_difference - angle helpers.

Every Waypoint spacing, speed and footprint in Waygen is computed with these
functions and the single ``EARTH_RADIUS_M`` below. Mixing them with an
ellipsoidal model would make sweep-line spacing drift, so other modules must
not bring their own distance maths.
"""

from __future__ import annotations

import math

from geopy.distance import great_circle

from .primitives import GeoPoint

# Mean earth radius (IUGG), the same sphere used by common web-map tooling.
EARTH_RADIUS_M = 6_371_008.8
_EARTH_RADIUS_KM = EARTH_RADIUS_M / 1000.0


def normalise_bearing(degrees: float) -> float:
    """Wrap an angle into [0, 360)."""

    if not math.isfinite(degrees):
        return 0.0
    wrapped = math.fmod(degrees, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    if wrapped >= 360.0:
        wrapped -= 360.0
    # Avoid returning -0.0 for tiny negative inputs.
    return wrapped + 0.0


def bearing_difference(first: float, second: float) -> float:
    """Smallest absolute angle between two bearings, in [0, 180]."""

    delta = abs(normalise_bearing(first) - normalise_bearing(second))
    return 360.0 - delta if delta > 180.0 else delta


def distance(start: GeoPoint, end: GeoPoint) -> float:
    """Great-circle distance in metres."""

    return great_circle(
        (start.latitude, start.longitude),
        (end.latitude, end.longitude),
        radius=_EARTH_RADIUS_KM,
    ).meters


def bearing(start: GeoPoint, end: GeoPoint) -> float:
    """Initial bearing from ``start`` to ``end``; 0 for coincident points."""

    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    d_lon = math.radians(end.longitude - start.longitude)
    x = math.sin(d_lon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    if x == 0.0 and y == 0.0:
        return 0.0
    return normalise_bearing(math.degrees(math.atan2(x, y)))


def destination(origin: GeoPoint, distance_m: float, bearing_deg: float) -> GeoPoint:
    """Project ``origin`` by ``distance_m`` metres along ``bearing_deg``."""

    if distance_m == 0.0:
        return origin
    target = great_circle(meters=distance_m, radius=_EARTH_RADIUS_KM).destination(
        (origin.latitude, origin.longitude), bearing_deg
    )
    longitude = (target.longitude + 540.0) % 360.0 - 180.0
    return GeoPoint(longitude=longitude, latitude=target.latitude)


def midpoint(start: GeoPoint, end: GeoPoint) -> GeoPoint:
    """Point halfway along the great circle from ``start`` to ``end``."""

    return destination(start, distance(start, end) / 2, bearing(start, end))
