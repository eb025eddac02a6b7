from app.api.v1.incidents.orm import Incident
from app.timeline import TimelineCamera, TimelineIncident
from app.utils.structures import humanize_enum


def timeline_incident(incident: Incident) -> TimelineIncident:
    """ORM incident -> the display form the timeline works with."""
    return TimelineIncident(
        id=incident.iid,
        category=humanize_enum(incident.type),
        start=incident.ts_start,
        end=incident.ts_end,
        severity=incident.severity.lower(),
        camera=TimelineCamera(
            id=incident.camera.iid,
            name=incident.camera.name,
            location=incident.camera.location,
        ),
        resolved=incident.resolved,
        description=incident.description,
        thumbnail_url=incident.thumbnail_url,
    )
