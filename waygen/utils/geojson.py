"""Mini README: GeoJSON helper utilities for Waygen.

Structure:
    * boundary_from_geojson - validate a Polygon/Feature payload into a
      ``BoundaryPolygon``.
    * boundary_to_feature - GeoJSON Feature for a boundary (session blocks,
      map overlays).
    * waypoint_to_feature / waypoints_to_feature_collection - point features
      carrying the per-waypoint properties.

Keeping the logic isolated avoids importing web framework dependencies when
the codec or the CLI needs to read and write GeoJSON.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Union

from ..errors import InvalidGeometryError
from ..geometry import BoundaryPolygon
from ..mission import Waypoint

GeoJSONInput = Union[str, bytes, Dict[str, Any]]


def _load(payload: GeoJSONInput) -> Dict[str, Any]:
    if isinstance(payload, dict):
        return payload
    if not isinstance(payload, (str, bytes, bytearray)):
        raise InvalidGeometryError("GeoJSON payload must be an object")
    try:
        loaded = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise InvalidGeometryError("GeoJSON payload is invalid JSON") from error
    if not isinstance(loaded, dict):
        raise InvalidGeometryError("GeoJSON payload must be an object")
    return loaded


def _as_object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def boundary_from_geojson(area_geojson: GeoJSONInput) -> BoundaryPolygon:
    """Validate GeoJSON and return the outer ring as a ``BoundaryPolygon``.

    Accepts a bare Polygon geometry, a Feature wrapping one, or a
    FeatureCollection whose first polygon feature is used.
    """

    geojson = _load(area_geojson)

    if geojson.get("type") == "FeatureCollection":
        features = geojson.get("features")
        polygons = [
            feature
            for feature in (features if isinstance(features, list) else [])
            if _as_object(_as_object(feature).get("geometry")).get("type") == "Polygon"
        ]
        if not polygons:
            raise InvalidGeometryError("FeatureCollection contains no polygon")
        geojson = polygons[0]

    if geojson.get("type") == "Feature":
        geometry = _as_object(geojson.get("geometry"))
    else:
        geometry = geojson

    if geometry.get("type") != "Polygon":
        raise InvalidGeometryError("Only polygon GeoJSON payloads are supported")

    coordinates = geometry.get("coordinates")
    ring = coordinates[0] if isinstance(coordinates, list) and coordinates else None
    if not isinstance(ring, list) or not ring:
        raise InvalidGeometryError("Polygon coordinates are required")

    try:
        return BoundaryPolygon.from_coordinates(ring)
    except (TypeError, ValueError) as error:
        raise InvalidGeometryError(f"Polygon coordinates are malformed: {error}") from error


def boundary_to_feature(boundary: BoundaryPolygon) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [boundary.as_coordinates()]},
        "properties": {},
    }


def waypoint_to_feature(waypoint: Waypoint, index: int) -> Dict[str, Any]:
    """Point feature for a waypoint with its per-point properties."""

    return {
        "type": "Feature",
        "id": waypoint.waypoint_id,
        "geometry": {"type": "Point", "coordinates": waypoint.position.as_coordinates()},
        "properties": {
            "index": index,
            "altitude": waypoint.altitude,
            "speed": waypoint.speed,
            "gimbalPitch": waypoint.gimbal_pitch,
            "heading": waypoint.heading,
            "action": waypoint.camera_action.value,
        },
    }


def waypoints_to_feature_collection(waypoints: Iterable[Waypoint]) -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [waypoint_to_feature(waypoint, index) for index, waypoint in enumerate(waypoints)],
    }
