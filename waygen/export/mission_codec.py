"""Mini README: Mission package (KMZ) encoder and decoder.

Structure:
    * MissionFile - result of importing a package.
    * MissionCodec - write/read DJI-compatible KMZ archives.

A package is a ZIP archive holding ``wpmz/template.kml``,
``wpmz/waylines.wpml`` and an opaque session block
``wpmz/res/waygen_session.json`` with the full ``MissionSettings`` and the
drawn boundary. Flight controllers ignore the session block; Waygen uses it
to restore the editing state exactly.

Import never fails because of the session block: when it is missing or
unreadable the waypoints are still returned together with a
``codec_partial_restore`` diagnostic. A malformed session polygon keeps the
restored settings and leaves the boundary empty. A corrupt archive or an
unparseable flight-plan document raises ``MissionDecodeError`` chained to
the cause.
"""

from __future__ import annotations

import io
import json
import uuid
import xml.etree.ElementTree as ET
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from ..errors import Diagnostic, InvalidGeometryError, MissionDecodeError, PartialRestoreError
from ..geometry import BoundaryPolygon, GeoPoint
from ..logging_utils import get_logger
from ..mission import CameraAction, MissionSettings, Waypoint
from ..utils.geojson import boundary_from_geojson, boundary_to_feature
from .wpml import build_template_kml, build_waylines_wpml, read_mission_config, read_point_features

LOGGER = get_logger(__name__)

TEMPLATE_PATH = "wpmz/template.kml"
WAYLINES_PATH = "wpmz/waylines.wpml"
SESSION_PATH = "wpmz/res/waygen_session.json"
SESSION_VERSION = 1


@dataclass(slots=True)
class MissionFile:
    """Waypoints recovered from a package plus any restored session state."""

    waypoints: List[Waypoint] = field(default_factory=list)
    settings: Optional[MissionSettings] = None
    boundary: Optional[BoundaryPolygon] = None
    mission_config: Dict[str, str] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def session_restored(self) -> bool:
        return self.settings is not None


def _waypoint_from_feature(feature: Dict[str, Any], defaults: MissionSettings) -> Waypoint:
    """Build a waypoint, falling back to ``defaults`` for absent properties."""

    properties = feature.get("properties", {})
    return Waypoint(
        position=GeoPoint.from_coordinates(feature["geometry"]["coordinates"]),
        altitude=properties.get("altitude", defaults.altitude),
        speed=properties.get("speed", defaults.speed),
        gimbal_pitch=properties.get("gimbalPitch", defaults.gimbal_pitch),
        heading=properties.get("heading", 0.0),
        camera_action=CameraAction(properties.get("action", defaults.waypoint_action.value)),
        waypoint_id=str(uuid.uuid4()),
    )


class MissionCodec:
    """Serialise missions to KMZ packages and read them back."""

    def __init__(self, *, author: str = "waygen") -> None:
        self.author = author

    def encode(
        self,
        waypoints: Sequence[Waypoint],
        settings: MissionSettings,
        boundary: Optional[BoundaryPolygon] = None,
    ) -> bytes:
        """Return the bytes of a KMZ package for the mission."""

        session = {
            "version": SESSION_VERSION,
            "settings": settings.model_dump(mode="json"),
            "polygon": boundary_to_feature(boundary) if boundary is not None else None,
        }
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(TEMPLATE_PATH, build_template_kml(waypoints, settings, author=self.author))
            archive.writestr(WAYLINES_PATH, build_waylines_wpml(waypoints, settings))
            archive.writestr(SESSION_PATH, json.dumps(session, indent=2))
        LOGGER.info(
            "Encoded mission package with %s waypoints (boundary=%s)",
            len(waypoints),
            boundary is not None,
        )
        return buffer.getvalue()

    def write(
        self,
        destination: Path,
        waypoints: Sequence[Waypoint],
        settings: MissionSettings,
        boundary: Optional[BoundaryPolygon] = None,
    ) -> Path:
        """Write a package to ``destination``, creating parent directories."""

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.encode(waypoints, settings, boundary))
        LOGGER.info("Mission package written to %s", destination)
        return destination

    def decode(self, payload: bytes, defaults: Optional[MissionSettings] = None) -> MissionFile:
        """Parse a KMZ package (or a bare KML document) into a ``MissionFile``."""

        defaults = defaults or MissionSettings()
        document, session_text, session_error = self._unpack(payload)
        try:
            root = ET.fromstring(document)
            features = read_point_features(root)
            mission_config = read_mission_config(root)
            waypoints = [_waypoint_from_feature(feature, defaults) for feature in features]
        except (ET.ParseError, ValueError, KeyError, IndexError) as error:
            raise MissionDecodeError(f"Flight plan document could not be parsed: {error}") from error

        mission = MissionFile(waypoints=waypoints, mission_config=mission_config)
        try:
            if session_error is not None:
                raise session_error
            if session_text is None:
                raise PartialRestoreError("Package has no session block; restored waypoints only")
            session = self._load_session(session_text)
            mission.settings = self._restore_settings(session)
            mission.boundary = self._restore_boundary(session)
        except PartialRestoreError as error:
            LOGGER.warning("Session block not fully restored: %s", error.message)
            mission.diagnostics.append(error.to_diagnostic())
        LOGGER.info(
            "Decoded mission package with %s waypoints (session restored=%s)",
            len(waypoints),
            mission.session_restored,
        )
        return mission

    def read(self, source: Path, defaults: Optional[MissionSettings] = None) -> MissionFile:
        try:
            payload = source.read_bytes()
        except OSError as error:
            raise MissionDecodeError(f"Unable to read mission package {source}: {error}") from error
        return self.decode(payload, defaults)

    @staticmethod
    def _unpack(payload: bytes) -> Tuple[bytes, Optional[bytes], Optional[PartialRestoreError]]:
        """Return the flight-plan document, the raw session block and any error reading it."""

        if not zipfile.is_zipfile(io.BytesIO(payload)):
            if payload.lstrip().startswith(b"<"):
                return payload, None, None
            raise MissionDecodeError("Payload is neither a KMZ archive nor a KML document")
        try:
            with zipfile.ZipFile(io.BytesIO(payload)) as archive:
                names = archive.namelist()
                document_name = next(
                    (name for name in names if name.endswith("waylines.wpml")),
                    next(
                        (name for name in names if name.endswith("template.kml")),
                        next((name for name in names if name.lower().endswith(".kml")), None),
                    ),
                )
                if document_name is None:
                    raise MissionDecodeError("Archive contains no KML or WPML flight plan")
                document = archive.read(document_name)
                session, session_error = MissionCodec._read_session(archive, names)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError, OSError) as error:
            raise MissionDecodeError(f"Mission archive is corrupt: {error}") from error
        LOGGER.debug("Reading flight plan from %s", document_name)
        return document, session, session_error

    @staticmethod
    def _read_session(
        archive: zipfile.ZipFile, names: List[str]
    ) -> Tuple[Optional[bytes], Optional[PartialRestoreError]]:
        if SESSION_PATH not in names:
            return None, None
        try:
            return archive.read(SESSION_PATH), None
        except (zipfile.BadZipFile, zlib.error, EOFError) as error:
            restore_error = PartialRestoreError(f"Session block is corrupt: {error}")
            restore_error.__cause__ = error
            return None, restore_error

    @staticmethod
    def _load_session(session_text: bytes) -> Dict[str, Any]:
        try:
            session = json.loads(session_text)
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise PartialRestoreError(f"Session block is not valid JSON: {error}") from error
        if not isinstance(session, dict) or not isinstance(session.get("settings"), dict):
            raise PartialRestoreError("Session block has no settings")
        return session

    @staticmethod
    def _restore_settings(session: Dict[str, Any]) -> MissionSettings:
        try:
            return MissionSettings(**session["settings"])
        except (ValidationError, TypeError) as error:
            raise PartialRestoreError(f"Session settings are invalid: {error}") from error

    @staticmethod
    def _restore_boundary(session: Dict[str, Any]) -> Optional[BoundaryPolygon]:
        """Drawn boundary from the session; settings stay restored when it is unusable."""

        polygon = session.get("polygon")
        if polygon is None:
            return None
        try:
            return boundary_from_geojson(polygon)
        except InvalidGeometryError as error:
            raise PartialRestoreError(
                f"Session polygon is invalid; settings restored without boundary: {error.message}"
            ) from error
