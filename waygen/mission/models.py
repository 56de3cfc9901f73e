"""Mini README: Mission data model shared by planners, metrics and the codec.

Structure:
    * CameraAction, PathType, OrbitDirection, UnitSystem - option enums.
    * MissionEndAction, RCLostAction - aircraft behaviours written to exports.
    * Waypoint - immutable waypoint record emitted by the path synthesizer.
    * MissionSettings - immutable Pydantic snapshot of the planning options.

``MissionSettings`` deliberately accepts out-of-range numbers (an overlap of
100%, a zero altitude) because those are ordinary intermediate states while
a user edits a mission. The synthesizer reports them as diagnostics.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, validator

from ..geometry import Footprint, GeoPoint, calculate_footprint
from ..geometry.footprint import DEFAULT_HFOV
from ..profiles import DEFAULT_PHOTO_CADENCE, REGISTRY, DroneProfile


class CameraAction(str, Enum):
    """Action triggered when the aircraft reaches a waypoint."""

    NONE = "none"
    PHOTO = "photo"
    RECORD = "record"


class PathType(str, Enum):
    GRID = "grid"
    ORBIT = "orbit"


class OrbitDirection(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter-clockwise"


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class MissionEndAction(str, Enum):
    """Behaviour after the final waypoint, using DJI WPML vocabulary."""

    GO_HOME = "goHome"
    AUTO_LAND = "autoLand"
    NO_ACTION = "noAction"
    GOTO_FIRST_WAYPOINT = "gotoFirstWaypoint"


class RCLostAction(str, Enum):
    """Behaviour when the remote-control link drops."""

    GO_BACK = "goBack"
    LANDING = "landing"
    HOVER = "hover"


def new_waypoint_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Single mission waypoint."""

    position: GeoPoint
    altitude: float
    speed: float
    gimbal_pitch: float
    heading: float = 0.0
    camera_action: CameraAction = CameraAction.NONE
    waypoint_id: str = field(default_factory=new_waypoint_id)

    @property
    def longitude(self) -> float:
        return self.position.longitude

    @property
    def latitude(self) -> float:
        return self.position.latitude

    def footprint(self, horizontal_fov: float) -> Optional[Footprint]:
        """Ground footprint photographed from this waypoint."""

        return calculate_footprint(
            self.position,
            self.altitude,
            self.heading,
            horizontal_fov,
            self.gimbal_pitch,
        )


class MissionSettings(BaseModel):
    """Flat snapshot of every option that influences path synthesis."""

    altitude: float = Field(60.0, description="Flight altitude above ground, metres.")
    speed: float = Field(10.0, description="Cruise speed between waypoints, m/s.")
    gimbal_pitch: float = Field(-90.0, description="Camera tilt; -90 is straight down.")
    path_type: PathType = Field(PathType.GRID, description="Lawnmower grid or circular orbit.")
    side_overlap: float = Field(70.0, description="Overlap between adjacent lines, percent.")
    front_overlap: float = Field(80.0, description="Overlap between consecutive photos, percent.")
    angle: float = Field(0.0, description="Sweep line bearing in degrees when auto direction is off.")
    auto_direction: bool = Field(False, description="Align sweep lines with the longest boundary edge.")
    spacing: float = Field(20.0, description="Distance between orbit waypoints, metres.")
    start_angle: float = Field(0.0, description="Bearing from the orbit centre to the first waypoint.")
    direction: OrbitDirection = Field(OrbitDirection.CLOCKWISE)
    reverse_path: bool = False
    straighten_legs: bool = False
    generate_every_point: bool = Field(
        False, description="Insert photo waypoints along each sweep line."
    )
    eliminate_extra_yaw: bool = Field(
        False, description="Lock every heading to the first leg's bearing."
    )
    waypoint_action: CameraAction = CameraAction.PHOTO
    units: UnitSystem = UnitSystem.METRIC
    selected_drone: str = Field("dji_mini_4_pro", description="Drone profile identifier.")
    custom_fov: float = Field(DEFAULT_HFOV, description="HFOV used by the custom profile.")
    photo_interval: float = Field(
        DEFAULT_PHOTO_CADENCE, description="Minimum seconds between photos for the custom profile."
    )
    mission_end_action: MissionEndAction = MissionEndAction.GO_HOME
    rc_lost_action: RCLostAction = RCLostAction.GO_BACK
    global_transitional_speed: float = Field(10.0, description="Speed flying to the first waypoint, m/s.")

    class Config:
        frozen = True
        extra = "ignore"

    @validator("selected_drone", pre=True)
    def _migrate_drone_id(cls, value: Optional[str]) -> str:
        """Rewrite legacy drone identifiers saved by older sessions."""

        if not value:
            return "custom"
        return REGISTRY.migrate_legacy_id(str(value))

    def updated(self, **changes: object) -> "MissionSettings":
        """Return a validated copy with ``changes`` applied."""

        payload = self.model_dump()
        payload.update(changes)
        return MissionSettings(**payload)

    def drone_profile(self) -> DroneProfile:
        """Effective profile; unknown ids fall back to the custom camera."""

        return REGISTRY.resolve(
            self.selected_drone,
            custom_fov=self.custom_fov,
            custom_cadence=self.photo_interval,
        )
