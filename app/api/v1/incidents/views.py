import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import session_dependency
from app.utils.structures import Status, resp
from . import crud, dependencies
from .schemas import Incident as IncidentSchema

_LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/incidents", tags=["Incidents"])


@router.get(
    "/",
    summary="List incidents",
    description=(
        "Returns incidents newest first. "
        "Use `?resolved=false` for the active queue or `?resolved=true` for the archive."
    ),
)
async def list_incidents(
    session: AsyncSession = Depends(session_dependency),
    resolved: bool | None = Query(default=None, description="Filter by resolution state"),
):
    incidents = await crud.get_incidents(session, resolved=resolved)
    return resp(Status.OK, [IncidentSchema.model_validate(i).model_dump() for i in incidents])


@router.get(
    "/all",
    summary="All incidents",
    description="Every incident with its camera, newest first. Feeds both the list view and the timeline.",
)
async def list_all_incidents(
    session: AsyncSession = Depends(session_dependency),
):
    incidents = await crud.get_incidents(session)
    return resp(Status.OK, [IncidentSchema.model_validate(i).model_dump() for i in incidents])


@router.patch(
    "/{incident_iid}/resolve",
    summary="Toggle incident resolution",
    description=(
        "Flips `resolved` and returns the incident with its new state. "
        "Resolving a resolved incident reopens it."
    ),
)
async def resolve_incident(
    incident=Depends(dependencies.incident_by_id),
    session: AsyncSession = Depends(session_dependency),
):
    incident = await crud.toggle_resolved(session, incident)
    _LOGGER.info("Incident %s resolved=%s", incident.iid, incident.resolved)
    return resp(Status.OK, IncidentSchema.model_validate(incident).model_dump())


@router.get(
    "/{incident_iid}",
    summary="Get incident by ID",
)
async def get_incident(
    incident=Depends(dependencies.incident_by_id),
):
    return resp(Status.OK, IncidentSchema.model_validate(incident).model_dump())
