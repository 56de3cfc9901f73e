"""Mini README: DJI WPML document builders and readers.

Structure:
    * build_template_kml / build_waylines_wpml - serialise waypoints plus the
      mission-level config into the two XML documents of a KMZ package.
    * read_point_features - turn any KML/WPML document into GeoJSON-like
      point features carrying whatever per-point properties were found.

Reading matches tags by local name so documents written against other WPML
schema versions (or plain Google Earth KML) are accepted.
"""

from __future__ import annotations

import time
import xml.etree.ElementTree as ET
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..geometry import normalise_bearing
from ..logging_utils import get_logger
from ..mission import CameraAction, MissionSettings, Waypoint

LOGGER = get_logger(__name__)

KML_NS = "http://www.opengis.net/kml/2.2"
WPML_NS = "http://www.dji.com/wpmz/1.0.2"
DJI_DRONE_ENUM = 68
DJI_DRONE_SUB_ENUM = 0
TAKEOFF_SECURITY_HEIGHT = 20

ET.register_namespace("", KML_NS)
ET.register_namespace("wpml", WPML_NS)

_RECORDING_FUNCS = {"startRecord", "stopRecord"}


def _kml(parent: ET.Element, tag: str, text: Optional[str] = None) -> ET.Element:
    element = ET.SubElement(parent, f"{{{KML_NS}}}{tag}")
    if text is not None:
        element.text = text
    return element


def _wpml(parent: ET.Element, tag: str, text: Any = None) -> ET.Element:
    element = ET.SubElement(parent, f"{{{WPML_NS}}}{tag}")
    if text is not None:
        element.text = repr(text) if isinstance(text, float) else str(text)
    return element


def _dji_heading(heading: float) -> float:
    """DJI expects headings in [-180, 180]."""

    heading = normalise_bearing(heading)
    return heading - 360.0 if heading > 180.0 else heading


def _document() -> tuple:
    root = ET.Element(f"{{{KML_NS}}}kml")
    document = _kml(root, "Document")
    return root, document


def _mission_config(document: ET.Element, settings: MissionSettings) -> None:
    config = _wpml(document, "missionConfig")
    _wpml(config, "flyToWaylineMode", "safely")
    _wpml(config, "finishAction", settings.mission_end_action.value)
    _wpml(config, "exitOnRCLost", "executeLostAction")
    _wpml(config, "executeRCLostAction", settings.rc_lost_action.value)
    _wpml(config, "takeOffSecurityHeight", TAKEOFF_SECURITY_HEIGHT)
    _wpml(config, "globalTransitionalSpeed", float(settings.global_transitional_speed))
    drone_info = _wpml(config, "droneInfo")
    _wpml(drone_info, "droneEnumValue", DJI_DRONE_ENUM)
    _wpml(drone_info, "droneSubEnumValue", DJI_DRONE_SUB_ENUM)


def _camera_func(action: CameraAction, recording: bool) -> Optional[str]:
    if action == CameraAction.PHOTO:
        return "takePhoto"
    if action == CameraAction.RECORD:
        return "stopRecord" if recording else "startRecord"
    return None


def _action_group(placemark: ET.Element, index: int, waypoint: Waypoint, camera_func: Optional[str]) -> None:
    group = _wpml(placemark, "actionGroup")
    _wpml(group, "actionGroupId", index)
    _wpml(group, "actionGroupStartIndex", index)
    _wpml(group, "actionGroupEndIndex", index)
    _wpml(group, "actionGroupMode", "sequence")
    trigger = _wpml(group, "actionTrigger")
    _wpml(trigger, "actionTriggerType", "reachPoint")

    gimbal = _wpml(group, "action")
    _wpml(gimbal, "actionId", 0)
    _wpml(gimbal, "actionActuatorFunc", "gimbalRotate")
    params = _wpml(gimbal, "actionActuatorFuncParam")
    _wpml(params, "gimbalRotateMode", "absoluteAngle")
    _wpml(params, "gimbalPitchRotateEnable", 1)
    _wpml(params, "gimbalPitchRotateAngle", float(waypoint.gimbal_pitch))
    _wpml(params, "gimbalRollRotateEnable", 0)
    _wpml(params, "gimbalYawRotateEnable", 0)
    _wpml(params, "gimbalRotateTimeEnable", 0)
    _wpml(params, "payloadPositionIndex", 0)

    if camera_func:
        camera = _wpml(group, "action")
        _wpml(camera, "actionId", 1)
        _wpml(camera, "actionActuatorFunc", camera_func)
        camera_params = _wpml(camera, "actionActuatorFuncParam")
        _wpml(camera_params, "payloadPositionIndex", 0)


def _placemarks(folder: ET.Element, waypoints: Sequence[Waypoint], *, executable: bool) -> None:
    recording = False
    for index, waypoint in enumerate(waypoints):
        placemark = _kml(folder, "Placemark")
        point = _kml(placemark, "Point")
        _kml(point, "coordinates", f"{waypoint.longitude!r},{waypoint.latitude!r}")
        _wpml(placemark, "index", index)
        if executable:
            _wpml(placemark, "executeHeight", float(waypoint.altitude))
        else:
            _wpml(placemark, "height", float(waypoint.altitude))
            _wpml(placemark, "useGlobalHeight", 0)
            _wpml(placemark, "useGlobalSpeed", 0)
            _wpml(placemark, "useGlobalHeadingParam", 0)
            _wpml(placemark, "useGlobalTurnParam", 0)
            _wpml(placemark, "gimbalPitchAngle", float(waypoint.gimbal_pitch))
        _wpml(placemark, "waypointSpeed", float(waypoint.speed))
        heading = _wpml(placemark, "waypointHeadingParam")
        _wpml(heading, "waypointHeadingMode", "smoothTransition")
        _wpml(heading, "waypointHeadingAngle", _dji_heading(waypoint.heading))
        _wpml(heading, "waypointHeadingPathMode", "followBadArc")
        turn = _wpml(placemark, "waypointTurnParam")
        _wpml(turn, "waypointTurnMode", "toPointAndStopWithDiscontinuityCurvature")
        _wpml(turn, "waypointTurnDampingDist", 0)

        camera_func = _camera_func(waypoint.camera_action, recording)
        if waypoint.camera_action == CameraAction.RECORD:
            recording = not recording
        _action_group(placemark, index, waypoint, camera_func)


def _serialise(root: ET.Element) -> bytes:
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def build_template_kml(
    waypoints: Sequence[Waypoint],
    settings: MissionSettings,
    *,
    author: str = "waygen",
) -> bytes:
    """Editable template document (``wpmz/template.kml``)."""

    root, document = _document()
    now_ms = int(time.time() * 1000)
    _wpml(document, "author", author)
    _wpml(document, "createTime", now_ms)
    _wpml(document, "updateTime", now_ms)
    _mission_config(document, settings)

    folder = _kml(document, "Folder")
    _wpml(folder, "templateType", "waypoint")
    _wpml(folder, "templateId", 0)
    coordinate_params = _wpml(folder, "waylineCoordinateSysParam")
    _wpml(coordinate_params, "coordinateMode", "WGS84")
    _wpml(coordinate_params, "heightMode", "relativeToStartPoint")
    _wpml(folder, "autoFlightSpeed", float(settings.speed))
    _placemarks(folder, waypoints, executable=False)
    return _serialise(root)


def build_waylines_wpml(waypoints: Sequence[Waypoint], settings: MissionSettings) -> bytes:
    """Executable wayline document (``wpmz/waylines.wpml``)."""

    root, document = _document()
    _mission_config(document, settings)
    folder = _kml(document, "Folder")
    _wpml(folder, "templateId", 0)
    _wpml(folder, "executeHeightMode", "relativeToStartPoint")
    _wpml(folder, "waylineId", 0)
    _wpml(folder, "autoFlightSpeed", float(settings.speed))
    _placemarks(folder, waypoints, executable=True)
    return _serialise(root)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _descendants(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for node in element.iter():
        if _local(node.tag) == name:
            yield node


def _first_text(element: ET.Element, *names: str) -> Optional[str]:
    for name in names:
        for node in _descendants(element, name):
            if node.text is not None and node.text.strip():
                return node.text.strip()
    return None


def _float(element: ET.Element, *names: str) -> Optional[float]:
    text = _first_text(element, *names)
    return float(text) if text is not None else None


def _camera_action(placemark: ET.Element) -> Optional[str]:
    """Camera action from the action group; ``None`` when the group is absent."""

    funcs = [node.text.strip() for node in _descendants(placemark, "actionActuatorFunc") if node.text]
    if not funcs and _child(placemark, "actionGroup") is None:
        return None
    if "takePhoto" in funcs:
        return CameraAction.PHOTO.value
    if _RECORDING_FUNCS.intersection(funcs):
        return CameraAction.RECORD.value
    return CameraAction.NONE.value


def read_point_features(root: ET.Element) -> List[Dict[str, Any]]:
    """Point features for every Placemark with Point geometry, in mission order.

    Raises ``ValueError`` when a numeric field or coordinate cannot be parsed.
    """

    features: List[Dict[str, Any]] = []
    for order, placemark in enumerate(_descendants(root, "Placemark")):
        point = next(_descendants(placemark, "Point"), None)
        if point is None:
            continue
        coordinates = _first_text(point, "coordinates")
        if coordinates is None:
            raise ValueError(f"Placemark {order} has no coordinates")
        parts = coordinates.split()[0].split(",")
        longitude, latitude = float(parts[0]), float(parts[1])

        properties: Dict[str, Any] = {}
        index = _float(placemark, "index")
        altitude = _float(placemark, "executeHeight", "height")
        speed = _float(placemark, "waypointSpeed")
        heading = _float(placemark, "waypointHeadingAngle")
        pitch = _float(placemark, "gimbalPitchRotateAngle", "gimbalPitchAngle")
        action = _camera_action(placemark)
        if altitude is not None:
            properties["altitude"] = altitude
        if speed is not None:
            properties["speed"] = speed
        if heading is not None:
            properties["heading"] = normalise_bearing(heading)
        if pitch is not None:
            properties["gimbalPitch"] = pitch
        if action is not None:
            properties["action"] = action
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [longitude, latitude]},
                "properties": properties,
                "_order": (index if index is not None else float(order), order),
            }
        )
    features.sort(key=lambda feature: feature["_order"])
    for feature in features:
        del feature["_order"]
    LOGGER.debug("Read %s point features", len(features))
    return features


def read_mission_config(root: ET.Element) -> Dict[str, str]:
    """Mission-level behaviours (finish action, lost-link action, speeds) as raw strings."""

    config = next(_descendants(root, "missionConfig"), None)
    if config is None:
        return {}
    values: Dict[str, str] = {}
    for name in ("finishAction", "exitOnRCLost", "executeRCLostAction", "globalTransitionalSpeed"):
        text = _first_text(config, name)
        if text is not None:
            values[name] = text
    return values
