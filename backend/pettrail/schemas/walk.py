from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from pettrail.core.constants import LAT_RANGE, LON_RANGE
from pettrail.schemas.common import CamelModel


class WalkPointIn(BaseModel):
    """One GPS sample as sent by the client.

    Accepts both the long field names and the short ones used by older
    mobile builds (lat / lon / ts / elev).
    """

    latitude: float = Field(
        ge=LAT_RANGE[0], le=LAT_RANGE[1],
        validation_alias=AliasChoices("latitude", "lat"),
    )
    longitude: float = Field(
        ge=LON_RANGE[0], le=LON_RANGE[1],
        validation_alias=AliasChoices("longitude", "lon"),
    )
    timestamp: datetime = Field(validation_alias=AliasChoices("timestamp", "ts"))
    elevation: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("elevation", "elev"),
    )


class StartWalkResponse(CamelModel):
    walk_id: UUID
    started_at: datetime


class WalkPointsBatchResponse(CamelModel):
    received: int
    accepted: int
    discarded: int


class StopWalkResponse(CamelModel):
    walk_id: UUID
    distance_meters: float
    duration_seconds: int
    avg_speed_kmh: float
    started_at: datetime
    finished_at: datetime


class WalkListItem(CamelModel):
    id: UUID
    started_at: datetime
    finished_at: Optional[datetime] = None
    distance_meters: Optional[float] = None
    duration_seconds: Optional[int] = None
    avg_speed_kmh: Optional[float] = None


class WalksPageResponse(CamelModel):
    content: list[WalkListItem]
    page: int
    size: int
    total_pages: int
    total_elements: int


class LineString(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: list[list[float]]  # [lon, lat]


class RouteProperties(CamelModel):
    walk_id: UUID


class WalkGeoJsonResponse(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: LineString
    properties: RouteProperties
