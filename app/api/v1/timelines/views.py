from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import session_dependency
from app.api.v1.incidents import crud as incidents_crud
from app.api.v1.incidents.schemas import Incident as IncidentSchema
from app.timeline import IncidentTimeline, ZOOM_LEVELS
from app.timeline.models import as_wall_clock
from app.utils.structures import DATE_PATTERN, Status, parse_iso_date, resp
from . import crud
from .mapper import timeline_incident

router = APIRouter(prefix="/timelines", tags=["Timelines"])


@router.get(
    "/",
    summary="Incidents in a time range",
    description=(
        "Incidents whose start lies in `[start, end]`, oldest first. "
        "Without parameters returns the last 24 hours."
    ),
)
async def list_timeline_incidents(
    session: AsyncSession = Depends(session_dependency),
    start: datetime | None = Query(default=None, description="Range start (ISO 8601)"),
    end: datetime | None = Query(default=None, description="Range end (ISO 8601)"),
):
    incidents = await crud.get_timeline_data(
        session,
        start=as_wall_clock(start) if start else None,
        end=as_wall_clock(end) if end else None,
    )
    return resp(Status.OK, [IncidentSchema.model_validate(i).model_dump() for i in incidents])


@router.get(
    "/view",
    summary="Rendered timeline",
    description=(
        "Lays out the timeline for one day: camera rows, incident blocks, axis markers, "
        "legend and quick jumps. `zoom` indexes 24h, 12h, 6h, 3h, 1h, 30m. "
        "`selected` focuses an incident and may switch the day."
    ),
)
async def get_timeline_view(
    request: Request,
    session: AsyncSession = Depends(session_dependency),
    date: str = Query(..., pattern=DATE_PATTERN.pattern, description="Day to show, YYYY-MM-DD"),
    zoom: int = Query(default=0, ge=0, le=len(ZOOM_LEVELS) - 1),
    start: datetime | None = Query(default=None, description="Viewport start (ISO 8601)"),
    cursor: datetime | None = Query(default=None, description="Playback cursor (ISO 8601)"),
    selected: int | None = Query(default=None, description="Incident to focus"),
):
    try:
        day = parse_iso_date(date)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    settings = request.app.state.settings
    incidents = [timeline_incident(i) for i in await incidents_crud.get_incidents(session)]
    timeline = IncidentTimeline(
        incidents,
        selected_date=day,
        width=settings.timeline_width,
        min_block_width=settings.timeline_min_block_width,
        label_min_width=settings.timeline_label_min_width,
    )
    timeline.viewport.set_zoom(zoom)
    if start is not None:
        timeline.viewport.set_start(as_wall_clock(start))
    if cursor is not None:
        timeline.scrubber.set_cursor(as_wall_clock(cursor))

    if selected is not None:
        focus = next((i for i in incidents if i.id == selected), None)
        if focus is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"incident {selected} not found!",
            )
        timeline.select_external(focus)

    return resp(Status.OK, timeline.render().model_dump(mode="json"))
