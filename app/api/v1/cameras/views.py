import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import session_dependency
from app.utils.structures import Status, resp
from . import crud, dependencies
from .schemas import Camera as CameraSchema, CameraBrief, CameraStatus, CameraStatusUpdate

_LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/cameras", tags=["Cameras"])


@router.get(
    "/",
    summary="List cameras",
    description="Returns every camera ordered by name, with the number of incidents recorded on it.",
)
async def list_cameras(
    session: AsyncSession = Depends(session_dependency),
):
    rows = await crud.get_cameras_with_counts(session)
    return resp(Status.OK, [
        CameraSchema.model_validate(camera).model_copy(update={"incident_count": count}).model_dump()
        for camera, count in rows
    ])


@router.patch(
    "/{camera_iid}/status",
    summary="Update camera status",
    description="Sets the camera status. Accepted values: `online`, `offline`, `maintenance`.",
)
async def update_camera_status(
    body: CameraStatusUpdate,
    camera=Depends(dependencies.camera_by_id),
    session: AsyncSession = Depends(session_dependency),
):
    new_status = body.status.upper()
    if new_status not in CameraStatus.__members__:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status '{body.status}'. Allowed: online, offline, maintenance",
        )
    camera = await crud.update_camera_status(session, camera, new_status)
    _LOGGER.info("Camera %s status set to %s", camera.iid, new_status)
    return resp(Status.OK, CameraBrief.model_validate(camera).model_dump())
