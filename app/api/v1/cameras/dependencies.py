from typing import Annotated

from fastapi import Path, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from .orm import Camera
from app.database import session_dependency

from . import crud


async def camera_by_id(
    camera_iid: Annotated[int, Path],
    session: AsyncSession = Depends(session_dependency),
) -> Camera:
    camera = await crud.get_camera(session=session, camera_iid=camera_iid)
    if camera is not None:
        return camera

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"camera {camera_iid} not found!",
    )
