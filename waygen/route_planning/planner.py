"""Mini README: Survey path synthesis for drone photo missions.

Structure:
    * SynthesisResult - waypoints plus diagnostics from one planning call.
    * PathSynthesizer - grid and orbit planner configured from WaygenSettings.
    * synthesize_path - convenience wrapper using the default configuration.

The synthesizer is a pure function of its inputs: the boundary polygon and
the ``MissionSettings`` snapshot are passed explicitly and never modified.
Invalid geometry or settings never raise out of ``synthesize``; they come
back as an empty waypoint list with a ``Diagnostic`` explaining why.
Generated waypoints carry the mission's safe speed, or the configured
speed when the camera cadence gives none.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional

from ..configuration import get_settings
from ..errors import Diagnostic, InvalidConfigurationError, InvalidGeometryError, WaygenError
from ..geometry import BoundaryPolygon, footprint_dimensions
from ..logging_utils import get_logger
from ..metrics import cruise_speed
from ..mission import MissionSettings, PathType, Waypoint
from ..profiles import DroneProfile
from .common import assign_headings, build_waypoints, planar_boundary, straighten
from .orbit import orbit_centre_and_radius, orbit_positions
from .sweep import boustrophedon_positions, dominant_edge_angle, sweep_segments

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class SynthesisResult:
    """Ordered waypoints produced by a planning call and any diagnostics."""

    waypoints: List[Waypoint] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    sweep_angle: Optional[float] = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def as_commands(self) -> List[dict]:
        """Convert waypoints to command dictionaries for previews and the API."""

        return [
            {
                "action": "navigate_to",
                "id": waypoint.waypoint_id,
                "latitude": waypoint.latitude,
                "longitude": waypoint.longitude,
                "altitude": waypoint.altitude,
                "speed": waypoint.speed,
                "heading": waypoint.heading,
                "gimbal_pitch": waypoint.gimbal_pitch,
                "camera_action": waypoint.camera_action.value,
            }
            for waypoint in self.waypoints
        ]


def resolve_profile(settings: MissionSettings) -> DroneProfile:
    """Effective profile for ``settings``; unknown ids use the custom camera."""

    return settings.drone_profile()


class PathSynthesizer:
    """Generate grid or orbit waypoint paths covering a boundary polygon."""

    def __init__(
        self,
        *,
        min_segment_length: Optional[float] = None,
        straighten_tolerance: Optional[float] = None,
        sweep_padding: Optional[float] = None,
    ) -> None:
        config = get_settings()
        self.min_segment_length = (
            config.min_segment_length_m if min_segment_length is None else min_segment_length
        )
        self.straighten_tolerance = (
            config.straighten_tolerance_deg if straighten_tolerance is None else straighten_tolerance
        )
        self.sweep_padding = config.sweep_padding_m if sweep_padding is None else sweep_padding
        LOGGER.debug(
            "Initialised PathSynthesizer min_segment=%s straighten_tol=%s padding=%s",
            self.min_segment_length,
            self.straighten_tolerance,
            self.sweep_padding,
        )

    def synthesize(
        self,
        boundary: Optional[BoundaryPolygon],
        settings: MissionSettings,
        profile: Optional[DroneProfile] = None,
    ) -> SynthesisResult:
        """Plan a path over ``boundary``; failures yield an empty result."""

        profile = profile or resolve_profile(settings)
        try:
            self._check_camera(settings, profile)
            if settings.path_type == PathType.ORBIT:
                result = self._orbit(boundary, settings)
            else:
                result = self._grid(boundary, settings, profile)
        except WaygenError as error:
            LOGGER.warning("Path synthesis produced no waypoints: %s", error.message)
            return SynthesisResult(diagnostics=[error.to_diagnostic()])
        speed = cruise_speed(result.waypoints, settings, profile)
        result.waypoints = [replace(waypoint, speed=speed) for waypoint in result.waypoints]
        LOGGER.info(
            "Generated %s path with %s waypoints at %.2f m/s using profile '%s'",
            settings.path_type.value,
            len(result.waypoints),
            speed,
            profile.profile_id,
        )
        return result

    @staticmethod
    def _check_camera(settings: MissionSettings, profile: DroneProfile) -> None:
        if not math.isfinite(settings.altitude) or settings.altitude <= 0:
            raise InvalidConfigurationError("Altitude must be positive")
        if not 0 < profile.horizontal_fov < 180:
            raise InvalidConfigurationError(
                f"Horizontal field of view must be between 0 and 180 degrees, got {profile.horizontal_fov}"
            )

    def _grid(
        self,
        boundary: Optional[BoundaryPolygon],
        settings: MissionSettings,
        profile: DroneProfile,
    ) -> SynthesisResult:
        if not 0 <= settings.side_overlap < 100:
            raise InvalidConfigurationError(
                f"Side overlap must be in [0, 100), got {settings.side_overlap}"
            )
        if settings.generate_every_point and not 0 <= settings.front_overlap < 100:
            raise InvalidConfigurationError(
                f"Front overlap must be in [0, 100), got {settings.front_overlap}"
            )

        width, height = footprint_dimensions(settings.altitude, profile.horizontal_fov)
        spacing = width * (1 - settings.side_overlap / 100)
        if not math.isfinite(spacing) or spacing <= 0:
            raise InvalidGeometryError(f"Derived line spacing {spacing:.3f} m is not positive")

        plane, polygon, _ = planar_boundary(boundary)
        sweep_angle = dominant_edge_angle(boundary) if settings.auto_direction else settings.angle
        if not math.isfinite(sweep_angle):
            raise InvalidConfigurationError(f"Sweep angle must be finite, got {sweep_angle}")
        segments = sweep_segments(
            polygon,
            sweep_angle=sweep_angle,
            spacing=spacing,
            padding=self.sweep_padding,
            min_segment_length=self.min_segment_length,
        )
        if not segments:
            raise InvalidGeometryError("No sweep line intersects the boundary polygon")

        photo_spacing = height * (1 - settings.front_overlap / 100) if settings.generate_every_point else 0.0
        planar = boustrophedon_positions(segments, sweep_angle, photo_spacing=photo_spacing)
        positions = plane.to_geo_many(planar)

        if settings.straighten_legs:
            before = len(positions)
            positions = straighten(positions, self.straighten_tolerance)
            LOGGER.debug("Straightening removed %s waypoints", before - len(positions))
        if settings.reverse_path:
            positions.reverse()

        headings = assign_headings(positions, lock_to_first_leg=settings.eliminate_extra_yaw)
        LOGGER.debug(
            "Grid footprint %.2f x %.2f m spacing %.2f m photo spacing %.2f m over %s segments",
            width,
            height,
            spacing,
            photo_spacing,
            len(segments),
        )
        return SynthesisResult(
            waypoints=build_waypoints(positions, headings, settings),
            sweep_angle=sweep_angle,
        )

    def _orbit(self, boundary: Optional[BoundaryPolygon], settings: MissionSettings) -> SynthesisResult:
        plane, polygon, vertices = planar_boundary(boundary)
        centre, radius = orbit_centre_and_radius(plane, polygon, vertices)
        positions, headings = orbit_positions(
            centre,
            radius,
            spacing=settings.spacing,
            start_angle=settings.start_angle,
            direction=settings.direction,
        )
        return SynthesisResult(waypoints=build_waypoints(positions, headings, settings))


def synthesize_path(
    boundary: Optional[BoundaryPolygon],
    settings: MissionSettings,
    profile: Optional[DroneProfile] = None,
) -> SynthesisResult:
    """Plan a path with tolerances taken from the cached ``WaygenSettings``."""

    return PathSynthesizer().synthesize(boundary, settings, profile)
