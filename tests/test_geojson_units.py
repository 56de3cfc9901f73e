"""Mini README: Tests for GeoJSON helpers and unit formatting.

These tests confirm that boundary payloads are validated before route
planning is executed, that waypoints serialise with their per-point
properties, and that display formatting follows the chosen unit system.
"""

from __future__ import annotations

import json

import pytest

from waygen.errors import ErrorKind, InvalidGeometryError
from waygen.geometry import GeoPoint
from waygen.mission import CameraAction, UnitSystem, Waypoint
from waygen.utils import (
    boundary_from_geojson,
    format_distance,
    format_duration,
    format_speed,
    to_display,
    to_metric,
    waypoints_to_feature_collection,
)

POLYGON = {
    "type": "Polygon",
    "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]],
}


def test_boundary_from_geojson_accepts_polygon_feature_and_collection() -> None:
    """Bare geometries, features and collections all resolve to the same ring."""

    feature = {"type": "Feature", "geometry": POLYGON, "properties": {}}
    collection = {"type": "FeatureCollection", "features": [feature]}

    expected = boundary_from_geojson(json.dumps(POLYGON))
    assert len(expected.vertices) == 4
    assert expected.is_closed
    assert boundary_from_geojson(feature) == expected
    assert boundary_from_geojson(json.dumps(collection).encode("utf-8")) == expected


def test_boundary_from_geojson_closes_open_ring() -> None:
    boundary = boundary_from_geojson({"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1]]]})
    assert boundary.ring[0] == boundary.ring[-1]


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[1, 2]",
        json.dumps({"type": "Point", "coordinates": [0, 0]}),
        json.dumps({"type": "Polygon", "coordinates": []}),
        json.dumps({"type": "Polygon", "coordinates": [[["a"], [1, 0], [1, 1]]]}),
        json.dumps({"type": "FeatureCollection", "features": []}),
    ],
)
def test_boundary_from_geojson_rejects_invalid_payloads(payload) -> None:
    with pytest.raises(InvalidGeometryError) as excinfo:
        boundary_from_geojson(payload)
    assert excinfo.value.kind == ErrorKind.INVALID_GEOMETRY


@pytest.mark.parametrize(
    "payload",
    [
        [1, 2, 3],
        5,
        None,
        {"type": "Polygon", "coordinates": 5},
        {"type": "Polygon", "coordinates": [5]},
        {"type": "Feature", "geometry": [1, 2]},
        {"type": "FeatureCollection", "features": [3, {"geometry": "x"}]},
        {"type": "Polygon", "coordinates": [[[0, 95], [1, 0], [1, 1]]]},
    ],
)
def test_boundary_from_geojson_rejects_non_object_structures(payload) -> None:
    """Decoded JSON of the wrong shape is reported as invalid geometry."""

    with pytest.raises(InvalidGeometryError):
        boundary_from_geojson(payload)


def test_waypoints_serialise_with_properties() -> None:
    waypoint = Waypoint(
        position=GeoPoint(longitude=4.9, latitude=52.37),
        altitude=80.0,
        speed=9.0,
        gimbal_pitch=-70.0,
        heading=135.0,
        camera_action=CameraAction.RECORD,
    )
    collection = waypoints_to_feature_collection([waypoint])

    feature = collection["features"][0]
    assert feature["id"] == waypoint.waypoint_id
    assert feature["geometry"]["coordinates"] == [4.9, 52.37]
    assert feature["properties"] == {
        "index": 0,
        "altitude": 80.0,
        "speed": 9.0,
        "gimbalPitch": -70.0,
        "heading": 135.0,
        "action": "record",
    }


def test_unit_conversion_round_trip() -> None:
    assert to_display(100.0, UnitSystem.IMPERIAL) == pytest.approx(328.084)
    assert to_metric(328.084, UnitSystem.IMPERIAL) == pytest.approx(100.0)
    assert to_display(100.0, UnitSystem.METRIC) == 100.0


def test_display_formatting() -> None:
    assert format_distance(950.4, UnitSystem.METRIC) == "950 m"
    assert format_distance(2500.0, UnitSystem.METRIC) == "2.50 km"
    assert format_distance(100.0, UnitSystem.IMPERIAL) == "328 ft"
    assert format_distance(5000.0, UnitSystem.IMPERIAL) == "3.11 mi"
    assert format_speed(10.0, UnitSystem.IMPERIAL) == "32.8 ft/s"
    assert format_duration(754.0) == "12:34"
    assert format_duration(59.6) == "1:00"
