from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.api.v1.cameras.schemas import CameraBrief
from app.utils.structures import humanize_enum


class IncidentType(str, Enum):
    GUN_THREAT = "GUN_THREAT"
    UNAUTHORISED_ACCESS = "UNAUTHORISED_ACCESS"
    FACE_RECOGNISED = "FACE_RECOGNISED"
    SUSPICIOUS_ACTIVITY = "SUSPICIOUS_ACTIVITY"
    MOTION_DETECTION = "MOTION_DETECTION"
    EQUIPMENT_TAMPERING = "EQUIPMENT_TAMPERING"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class IncidentBase(BaseModel):
    camera_iid: int
    type: IncidentType
    ts_start: datetime
    ts_end: datetime
    thumbnail_url: str = ""
    resolved: bool = False
    severity: Severity
    description: Optional[str] = None

    @field_serializer("type")
    def _display_type(self, value: IncidentType) -> str:
        return humanize_enum(value.value)

    @field_serializer("severity")
    def _lower_severity(self, value: Severity) -> str:
        return value.value.lower()


class Incident(IncidentBase):
    model_config = ConfigDict(from_attributes=True)
    iid: int = Field(gt=0)
    created_at: datetime
    updated_at: datetime
    camera: CameraBrief


class IncidentStats(BaseModel):
    total_incidents: int
    unresolved_incidents: int
    critical_incidents: int
    incidents_by_type: list[dict]
    incidents_by_severity: list[dict]
