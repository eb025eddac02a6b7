from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


def as_wall_clock(value: datetime) -> datetime:
    """Aware datetimes are normalised to naive UTC; naive ones pass through."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TimelineCamera(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)
    id: int
    name: str
    location: str = ""


class TimelineIncident(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)
    id: int
    category: str
    start: datetime
    end: datetime
    severity: str = ""
    camera: TimelineCamera
    resolved: bool = False
    description: Optional[str] = None
    thumbnail_url: str = ""

    @field_validator("start", "end")
    @classmethod
    def _wall_clock(cls, value: datetime) -> datetime:
        return as_wall_clock(value)


class IncidentBlock(BaseModel):
    incident_id: int
    camera_id: int
    row: int
    x: float
    y: float
    width: float
    height: float
    color: str
    label: Optional[str] = None
    high_priority: bool = False
    selected: bool = False
    incident: TimelineIncident


class TimeMarker(BaseModel):
    time: datetime
    x: float
    label: str
    is_hour: bool


class LegendEntry(BaseModel):
    category: str
    color: str


class QuickJump(BaseModel):
    incident_id: int
    label: str


class TimelineFrame(BaseModel):
    selected_date: date
    zoom_index: int
    zoom_label: str
    viewport_start: datetime
    viewport_end: datetime
    cursor: datetime
    cursor_x: float
    playing: bool
    dragging: bool
    speed: float
    can_zoom_in: bool
    can_zoom_out: bool
    can_pan_left: bool
    can_pan_right: bool
    width: float
    height: float
    cameras: list[TimelineCamera]
    blocks: list[IncidentBlock]
    markers: list[TimeMarker]
    legend: list[LegendEntry]
    quick_jumps: list[QuickJump]
    selected_incident_id: Optional[int] = None
