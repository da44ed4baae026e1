from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from pettrail.api.deps import get_ingestor, get_walk_service
from pettrail.core.config import settings
from pettrail.core.constants import MIN_POINTS_PER_BATCH
from pettrail.core.errors import InvalidPayload, NoActiveWalk
from pettrail.schemas.walk import (
    LineString,
    RouteProperties,
    StartWalkResponse,
    StopWalkResponse,
    WalkGeoJsonResponse,
    WalkListItem,
    WalkPointIn,
    WalkPointsBatchResponse,
    WalksPageResponse,
)
from pettrail.services.ingestion import TrajectoryIngestor
from pettrail.services.walks import WalkService

router = APIRouter(prefix="/api/walks", tags=["walks"])


@router.post("/start", response_model=StartWalkResponse)
def start_walk(
    pet_id: UUID = Query(..., alias="petId"),
    service: WalkService = Depends(get_walk_service),
):
    started = service.start_walk(pet_id)
    return StartWalkResponse(walk_id=started.walk_id, started_at=started.started_at)


@router.get("/active", response_model=StartWalkResponse)
def get_active_walk(
    pet_id: UUID = Query(..., alias="petId"),
    service: WalkService = Depends(get_walk_service),
):
    active = service.get_active_walk(pet_id)
    if active is None:
        raise NoActiveWalk(pet_id)
    return StartWalkResponse(walk_id=active.walk_id, started_at=active.started_at)


@router.post("/{walk_id}/points", response_model=WalkPointsBatchResponse, status_code=202)
def upload_walk_points(
    walk_id: UUID,
    points: list[WalkPointIn] = Body(...),
    ingestor: TrajectoryIngestor = Depends(get_ingestor),
):
    """Upload a batch of GPS points for an active walk.

    Points are sorted by timestamp; points that do not advance in time or
    that imply more than the speed limit from the previous accepted point
    are discarded and counted.
    """
    if not (MIN_POINTS_PER_BATCH <= len(points) <= settings.max_points_per_batch):
        raise InvalidPayload(
            f"Payload must have {MIN_POINTS_PER_BATCH}..{settings.max_points_per_batch} points."
        )

    result = ingestor.ingest(walk_id, points)
    return WalkPointsBatchResponse(
        received=result.received,
        accepted=result.accepted_count,
        discarded=result.discarded_count,
    )


@router.post("/{walk_id}/stop", response_model=StopWalkResponse)
def stop_walk(walk_id: UUID, service: WalkService = Depends(get_walk_service)):
    stopped = service.stop_walk(walk_id)
    return StopWalkResponse(
        walk_id=stopped.walk_id,
        distance_meters=stopped.distance_m,
        duration_seconds=stopped.duration_s,
        avg_speed_kmh=stopped.avg_speed_kmh,
        started_at=stopped.started_at,
        finished_at=stopped.finished_at,
    )


@router.get("", response_model=WalksPageResponse)
def list_walks(
    pet_id: UUID = Query(..., alias="petId"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1, le=settings.max_page_size),
    service: WalkService = Depends(get_walk_service),
):
    """List walks of a pet, most recent first.

      GET /api/walks?petId=...&page=0&size=10
    """
    result = service.list_walks(pet_id, page, size or settings.default_page_size)
    return WalksPageResponse(
        content=[
            WalkListItem(
                id=w.id,
                started_at=w.started_at,
                finished_at=w.finished_at,
                distance_meters=w.distance_m,
                duration_seconds=w.duration_s,
                avg_speed_kmh=w.avg_speed_kmh,
            )
            for w in result.items
        ],
        page=result.page,
        size=result.size,
        total_pages=result.total_pages,
        total_elements=result.total_elements,
    )


@router.get("/{walk_id}/geojson", response_model=WalkGeoJsonResponse)
def get_walk_geojson(walk_id: UUID, service: WalkService = Depends(get_walk_service)):
    points = service.route(walk_id)
    coords = [[p.longitude, p.latitude] for p in points]
    return WalkGeoJsonResponse(
        geometry=LineString(coordinates=coords),
        properties=RouteProperties(walk_id=walk_id),
    )
