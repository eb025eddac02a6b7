from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .orm import Camera
from app.api.v1.incidents.orm import Incident


async def get_cameras_with_counts(session: AsyncSession) -> list[tuple[Camera, int]]:
    stmt = (
        select(Camera, func.count(Incident.iid))
        .outerjoin(Incident, Incident.camera_iid == Camera.iid)
        .group_by(Camera.iid)
        .order_by(Camera.name)
    )
    result = await session.execute(stmt)
    return [(camera, count) for camera, count in result.all()]


async def get_camera(session: AsyncSession, camera_iid: int) -> Camera | None:
    return await session.get(Camera, camera_iid)


async def update_camera_status(session: AsyncSession, camera: Camera, status: str) -> Camera:
    camera.status = status
    await session.commit()
    await session.refresh(camera)
    return camera
