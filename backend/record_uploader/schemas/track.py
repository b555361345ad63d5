from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TrackPoint(BaseModel):
    """A single GPS sample; `sort_num` gives its position in the track."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    lat: float
    lng: float
    sort_num: int


class TrackMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    # Meters, as integrated by the recording device. None when unknown.
    total_distance: Optional[float] = None
    formatted_distance: str = ""
    total_time: int = 0  # seconds
    formatted_time: str = ""
    sample_time_interval: float = 0.0  # seconds between samples
    point_count: int = 0
    created_at: Optional[datetime] = None


class Track(BaseModel):
    """Recorded track for one session, in the layout of the track JSON files."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    points: tuple[TrackPoint, ...] = Field(default=(), alias="track")
    metadata: TrackMetadata = Field(default_factory=TrackMetadata)


class Route(BaseModel):
    """A venue from the route catalog (routes.json)."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    route_name: str
    rule_id: str
    plan_id: str
    route_rule: str = ""
    max_time: int = 0
    min_time: int = 0
    route_distance_km: float = 0.0
    rule_end_time: str = ""
    rule_start_time: str = ""
