from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_serializer


class CameraStatus(str, Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    MAINTENANCE = "MAINTENANCE"


class CameraBase(BaseModel):
    name: str
    location: str
    status: str

    @field_serializer("status")
    def _lower_status(self, value: str) -> str:
        return value.lower()


class CameraBrief(CameraBase):
    model_config = ConfigDict(from_attributes=True)
    iid: int = Field(gt=0)


class Camera(CameraBrief):
    created_at: datetime
    updated_at: datetime
    incident_count: int = 0


class CameraStatusUpdate(BaseModel):
    status: str = Field(description="online | offline | maintenance")
