"""Mini README: FastAPI-powered planning service for Waygen.

Structure:
    * create_application - application factory wiring the JSON routes.
    * Request models - Pydantic payloads for planning and footprints.

The service is a thin shell over the core: it parses the boundary and
settings, calls the path synthesizer, metrics evaluator and mission codec,
and serialises their results. No mission state is kept between requests.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from .. import __version__
from ..errors import InvalidGeometryError, MissionDecodeError
from ..export import MissionCodec, MissionFile
from ..geometry import GeoPoint, calculate_footprint
from ..geometry.footprint import DEFAULT_HFOV
from ..logging_utils import get_logger
from ..metrics import evaluate_mission
from ..mission import MissionSettings
from ..profiles import REGISTRY
from ..route_planning import PathSynthesizer, SynthesisResult
from ..utils.geojson import boundary_from_geojson, boundary_to_feature, waypoints_to_feature_collection

LOGGER = get_logger(__name__)

KMZ_MEDIA_TYPE = "application/vnd.google-earth.kmz"


class PlanRequest(BaseModel):
    """Boundary polygon (GeoJSON) plus the settings snapshot to plan with."""

    boundary: Dict[str, Any]
    settings: MissionSettings = Field(default_factory=MissionSettings)


class ExportRequest(PlanRequest):
    filename: str = Field("waygen_mission", description="Download name without extension.")


class FootprintRequest(BaseModel):
    longitude: float
    latitude: float
    altitude: float
    heading: float = 0.0
    horizontal_fov: float = DEFAULT_HFOV
    gimbal_pitch: float = -90.0


def _mission_payload(mission: MissionFile) -> Dict[str, Any]:
    return {
        "waypoints": waypoints_to_feature_collection(mission.waypoints),
        "settings": mission.settings.model_dump(mode="json") if mission.settings else None,
        "boundary": boundary_to_feature(mission.boundary) if mission.boundary else None,
        "mission_config": mission.mission_config,
        "diagnostics": [diagnostic.as_dict() for diagnostic in mission.diagnostics],
    }


def create_application() -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    app = FastAPI(title="Waygen Planning Service", version=__version__)
    synthesizer = PathSynthesizer()
    codec = MissionCodec()

    def plan(payload: PlanRequest) -> SynthesisResult:
        try:
            boundary = boundary_from_geojson(payload.boundary)
        except InvalidGeometryError as error:
            raise HTTPException(status_code=400, detail=error.message) from error
        return synthesizer.synthesize(boundary, payload.settings)

    @app.get("/profiles")
    async def profiles() -> JSONResponse:
        """List the drone presets available for planning."""

        entries: List[Dict[str, Any]] = [
            {
                "id": profile.profile_id,
                "name": profile.display_name,
                "hfov": profile.horizontal_fov,
                "max_flight_time": profile.max_flight_time,
                "photo_interval": profile.photo_cadence,
            }
            for profile in REGISTRY.profiles()
        ]
        return JSONResponse({"profiles": entries})

    @app.post("/plan")
    async def plan_route(payload: PlanRequest) -> JSONResponse:
        """Return a generated path, its metrics and any diagnostics."""

        result = plan(payload)
        metrics = evaluate_mission(result.waypoints, payload.settings)
        LOGGER.info("Planned route with %s waypoints", len(result.waypoints))
        return JSONResponse(
            {
                "commands": result.as_commands(),
                "waypoints": waypoints_to_feature_collection(result.waypoints),
                "sweep_angle": result.sweep_angle,
                "metrics": metrics.as_dict(),
                "diagnostics": [diagnostic.as_dict() for diagnostic in result.diagnostics],
            }
        )

    @app.post("/footprint")
    async def footprint(payload: FootprintRequest) -> JSONResponse:
        """Project a single camera footprint onto the ground."""

        projected = calculate_footprint(
            GeoPoint(longitude=payload.longitude, latitude=payload.latitude),
            payload.altitude,
            payload.heading,
            payload.horizontal_fov,
            payload.gimbal_pitch,
        )
        if projected is None:
            raise HTTPException(status_code=422, detail="Altitude and field of view must be non-zero")
        return JSONResponse(projected.to_geojson())

    @app.post("/export")
    async def export_mission(payload: ExportRequest) -> Response:
        """Plan the mission and return it as a downloadable KMZ package."""

        result = plan(payload)
        if not result.waypoints:
            raise HTTPException(
                status_code=422,
                detail=[diagnostic.as_dict() for diagnostic in result.diagnostics],
            )
        boundary = boundary_from_geojson(payload.boundary)
        package = codec.encode(result.waypoints, payload.settings, boundary)
        LOGGER.info("Exported package %s.kmz (%s bytes)", payload.filename, len(package))
        return Response(
            content=package,
            media_type=KMZ_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{payload.filename}.kmz"'},
        )

    @app.post("/import")
    async def import_mission(request: Request) -> JSONResponse:
        """Decode a KMZ/KML body and return waypoints plus restored session."""

        body = await request.body()
        try:
            mission = codec.decode(body)
        except MissionDecodeError as error:
            LOGGER.warning("Rejected mission upload: %s", error.message)
            raise HTTPException(status_code=400, detail=error.message) from error
        return JSONResponse(_mission_payload(mission))

    return app
