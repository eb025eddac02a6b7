from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.incidents import crud
from app.api.v1.incidents.schemas import IncidentStats
from app.database import session_dependency
from app.utils.structures import Status, humanize_enum, resp

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get(
    "/",
    summary="Dashboard statistics",
    description="Incident totals plus counts grouped by type and by severity, largest group first.",
)
async def get_stats(
    session: AsyncSession = Depends(session_dependency),
):
    stats = await crud.get_incident_stats(session)
    stats["incidents_by_type"] = [
        {"type": humanize_enum(item["type"]), "count": item["count"]}
        for item in stats["incidents_by_type"]
    ]
    stats["incidents_by_severity"] = [
        {"severity": item["severity"].lower(), "count": item["count"]}
        for item in stats["incidents_by_severity"]
    ]
    return resp(Status.OK, IncidentStats.model_validate(stats).model_dump())
