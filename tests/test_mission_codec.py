"""Mini README: Tests for KMZ mission package encoding and decoding.

Packages are built in memory. Corrupted variants are produced by rewriting
individual archive members so each failure path is exercised on an
otherwise valid package.
"""

from __future__ import annotations

import io
import json
import xml.etree.ElementTree as ET
import zipfile

import pytest

from conftest import square
from waygen.errors import ErrorKind, MissionDecodeError
from waygen.export import MissionCodec
from waygen.export.mission_codec import SESSION_PATH, TEMPLATE_PATH, WAYLINES_PATH
from waygen.export.wpml import WPML_NS
from waygen.geometry import GeoPoint
from waygen.mission import (
    CameraAction,
    MissionEndAction,
    MissionSettings,
    OrbitDirection,
    PathType,
    RCLostAction,
    Waypoint,
)
from waygen.route_planning import synthesize_path

SETTINGS = MissionSettings(
    altitude=45.0,
    speed=8.0,
    side_overlap=65.0,
    front_overlap=75.0,
    angle=15.0,
    reverse_path=True,
    selected_drone="dji_air_3",
    mission_end_action=MissionEndAction.AUTO_LAND,
    rc_lost_action=RCLostAction.HOVER,
)


def _planned():
    boundary = square()
    return synthesize_path(boundary, SETTINGS).waypoints, boundary


def _rewrite(payload: bytes, replacements: dict) -> bytes:
    """Copy an archive, replacing (or dropping, for ``None``) named members."""

    source = zipfile.ZipFile(io.BytesIO(payload))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as target:
        for name in source.namelist():
            if name in replacements:
                if replacements[name] is not None:
                    target.writestr(name, replacements[name])
                continue
            target.writestr(name, source.read(name))
    return buffer.getvalue()


def _corrupt_member(payload: bytes, name: str) -> bytes:
    """Flip bytes inside the compressed data of ``name`` without touching the headers."""

    info = zipfile.ZipFile(io.BytesIO(payload)).getinfo(name)
    offset = info.header_offset
    name_length = int.from_bytes(payload[offset + 26 : offset + 28], "little")
    extra_length = int.from_bytes(payload[offset + 28 : offset + 30], "little")
    start = offset + 30 + name_length + extra_length + info.compress_size // 3
    damaged = bytearray(payload)
    for index in range(start, start + min(24, info.compress_size // 3)):
        damaged[index] ^= 0xFF
    return bytes(damaged)


def test_package_layout():
    waypoints, boundary = _planned()
    payload = MissionCodec().encode(waypoints, SETTINGS, boundary)

    archive = zipfile.ZipFile(io.BytesIO(payload))
    assert set(archive.namelist()) == {TEMPLATE_PATH, WAYLINES_PATH, SESSION_PATH}
    session = json.loads(archive.read(SESSION_PATH))
    assert session["version"] == 1
    assert session["settings"]["selected_drone"] == "dji_air_3"
    assert session["polygon"]["geometry"]["type"] == "Polygon"

    waylines = ET.fromstring(archive.read(WAYLINES_PATH))
    finish = waylines.find(f".//{{{WPML_NS}}}finishAction")
    assert finish is not None and finish.text == "autoLand"
    drone = waylines.find(f".//{{{WPML_NS}}}droneEnumValue")
    assert drone is not None and drone.text == "68"


def test_round_trip_restores_session_and_waypoints():
    waypoints, boundary = _planned()
    codec = MissionCodec()

    mission = codec.decode(codec.encode(waypoints, SETTINGS, boundary))

    assert mission.diagnostics == []
    assert mission.session_restored
    assert mission.settings == SETTINGS
    assert mission.boundary == boundary
    assert mission.mission_config["finishAction"] == "autoLand"
    assert mission.mission_config["executeRCLostAction"] == "hover"
    assert len(mission.waypoints) == len(waypoints)
    for restored, original in zip(mission.waypoints, waypoints):
        assert restored.position == original.position
        assert restored.altitude == original.altitude
        assert restored.speed == original.speed
        assert restored.gimbal_pitch == original.gimbal_pitch
        assert restored.heading == pytest.approx(original.heading, abs=1e-9)
        assert restored.camera_action == CameraAction.PHOTO
        assert restored.waypoint_id != original.waypoint_id


def test_round_trip_orbit_settings():
    orbit = SETTINGS.updated(path_type=PathType.ORBIT, direction=OrbitDirection.COUNTER_CLOCKWISE, spacing=12.5)
    boundary = square()
    waypoints = synthesize_path(boundary, orbit).waypoints
    codec = MissionCodec()

    mission = codec.decode(codec.encode(waypoints, orbit, boundary))

    assert mission.settings == orbit
    assert len(mission.waypoints) == len(waypoints)


def test_record_action_survives_round_trip():
    settings = SETTINGS.updated(waypoint_action=CameraAction.RECORD)
    waypoints, boundary = _planned()
    waypoints = [
        Waypoint(position=w.position, altitude=w.altitude, speed=w.speed, gimbal_pitch=w.gimbal_pitch,
                 heading=w.heading, camera_action=CameraAction.RECORD)
        for w in waypoints
    ]
    codec = MissionCodec()
    payload = codec.encode(waypoints, settings, boundary)

    wpml = zipfile.ZipFile(io.BytesIO(payload)).read(WAYLINES_PATH).decode("utf-8")
    assert "startRecord" in wpml and "stopRecord" in wpml
    mission = codec.decode(payload)
    assert {w.camera_action for w in mission.waypoints} == {CameraAction.RECORD}


def test_write_and_read_file(tmp_path):
    waypoints, boundary = _planned()
    codec = MissionCodec()
    target = codec.write(tmp_path / "missions" / "survey.kmz", waypoints, SETTINGS, boundary)

    assert target.exists()
    assert codec.read(target).settings == SETTINGS


def test_truncated_session_block_yields_partial_restore():
    waypoints, boundary = _planned()
    codec = MissionCodec()
    payload = codec.encode(waypoints, SETTINGS, boundary)
    session_text = zipfile.ZipFile(io.BytesIO(payload)).read(SESSION_PATH)
    broken = _rewrite(payload, {SESSION_PATH: session_text[: len(session_text) // 2]})

    mission = codec.decode(broken)

    assert len(mission.waypoints) == len(waypoints)
    assert not mission.session_restored
    assert [d.kind for d in mission.diagnostics] == [ErrorKind.CODEC_PARTIAL_RESTORE]


def test_missing_session_block_yields_partial_restore():
    waypoints, boundary = _planned()
    codec = MissionCodec()
    stripped = _rewrite(codec.encode(waypoints, SETTINGS, boundary), {SESSION_PATH: None})

    mission = codec.decode(stripped, defaults=SETTINGS)

    assert len(mission.waypoints) == len(waypoints)
    assert mission.settings is None
    assert mission.diagnostics[0].kind == ErrorKind.CODEC_PARTIAL_RESTORE


@pytest.mark.parametrize(
    "polygon",
    [{"type": "Point"}, [1, 2, 3], 5, {"type": "Polygon", "coordinates": 5}],
)
def test_malformed_session_polygon_keeps_settings(polygon):
    waypoints, boundary = _planned()
    codec = MissionCodec()
    session = {"version": 1, "settings": SETTINGS.model_dump(mode="json"), "polygon": polygon}
    payload = _rewrite(codec.encode(waypoints, SETTINGS, boundary), {SESSION_PATH: json.dumps(session)})

    mission = codec.decode(payload)

    assert len(mission.waypoints) == len(waypoints)
    assert mission.settings == SETTINGS
    assert mission.boundary is None
    assert [d.kind for d in mission.diagnostics] == [ErrorKind.CODEC_PARTIAL_RESTORE]


def test_session_without_polygon_restores_settings():
    waypoints, _ = _planned()
    codec = MissionCodec()
    mission = codec.decode(codec.encode(waypoints, SETTINGS))
    assert mission.settings == SETTINGS
    assert mission.boundary is None
    assert mission.diagnostics == []


def test_corrupt_payload_raises_decode_error():
    with pytest.raises(MissionDecodeError) as excinfo:
        MissionCodec().decode(b"\x00\x01 definitely not a mission")
    assert excinfo.value.kind == ErrorKind.CODEC_DECODE_FAILURE


def test_corrupt_session_member_keeps_waypoints():
    waypoints, boundary = _planned()
    codec = MissionCodec()
    payload = _corrupt_member(codec.encode(waypoints, SETTINGS, boundary), SESSION_PATH)

    mission = codec.decode(payload)

    assert len(mission.waypoints) == len(waypoints)
    assert not mission.session_restored
    assert [d.kind for d in mission.diagnostics] == [ErrorKind.CODEC_PARTIAL_RESTORE]
    assert "corrupt" in mission.diagnostics[0].message


def test_corrupt_flight_plan_member_raises_decode_error():
    waypoints, boundary = _planned()
    codec = MissionCodec()
    payload = _corrupt_member(codec.encode(waypoints, SETTINGS, boundary), WAYLINES_PATH)

    with pytest.raises(MissionDecodeError) as excinfo:
        codec.decode(payload)
    assert excinfo.value.kind == ErrorKind.CODEC_DECODE_FAILURE
    assert excinfo.value.__cause__ is not None


def test_invalid_flight_plan_xml_keeps_cause():
    waypoints, boundary = _planned()
    codec = MissionCodec()
    payload = _rewrite(
        codec.encode(waypoints, SETTINGS, boundary),
        {WAYLINES_PATH: b"<kml><Document><Placemark>"},
    )

    with pytest.raises(MissionDecodeError) as excinfo:
        codec.decode(payload)
    assert isinstance(excinfo.value.__cause__, ET.ParseError)


def test_unparseable_coordinates_keep_cause():
    document = b"<kml><Placemark><Point><coordinates>east,north</coordinates></Point></Placemark></kml>"
    with pytest.raises(MissionDecodeError) as excinfo:
        MissionCodec().decode(document)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_archive_without_flight_plan_is_rejected():
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("readme.txt", "nothing to fly")
    with pytest.raises(MissionDecodeError):
        MissionCodec().decode(buffer.getvalue())


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(MissionDecodeError) as excinfo:
        MissionCodec().read(tmp_path / "absent.kmz")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_plain_kml_from_other_tools_uses_defaults():
    document = b"""<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark><name>Route</name><LineString><coordinates>1,2 3,4</coordinates></LineString></Placemark>
    <Placemark><name>A</name><Point><coordinates>-0.1280,51.5000,30</coordinates></Point></Placemark>
    <Placemark><name>B</name><Point><coordinates>-0.1270,51.5010</coordinates></Point></Placemark>
  </Document>
</kml>"""
    defaults = MissionSettings(altitude=70.0, speed=6.0, gimbal_pitch=-45.0)

    mission = MissionCodec().decode(document, defaults=defaults)

    assert [w.position for w in mission.waypoints] == [
        GeoPoint(longitude=-0.128, latitude=51.5),
        GeoPoint(longitude=-0.127, latitude=51.501),
    ]
    first = mission.waypoints[0]
    assert (first.altitude, first.speed, first.gimbal_pitch, first.heading) == (70.0, 6.0, -45.0, 0.0)
    assert first.camera_action == CameraAction.PHOTO
    assert mission.diagnostics[0].kind == ErrorKind.CODEC_PARTIAL_RESTORE


def test_placemarks_are_ordered_by_index():
    document = f"""<kml xmlns="http://www.opengis.net/kml/2.2" xmlns:wpml="{WPML_NS}"><Document><Folder>
      <Placemark><Point><coordinates>2,2</coordinates></Point><wpml:index>1</wpml:index></Placemark>
      <Placemark><Point><coordinates>1,1</coordinates></Point><wpml:index>0</wpml:index></Placemark>
    </Folder></Document></kml>""".encode("utf-8")

    mission = MissionCodec().decode(document)

    assert [w.longitude for w in mission.waypoints] == [1.0, 2.0]
