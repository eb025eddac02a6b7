from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.incidents import crud as incidents_crud
from app.api.v1.incidents.orm import Incident


async def get_timeline_data(
    session: AsyncSession,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[Incident]:
    """Incidents starting inside [start, end]; defaults to the last 24 hours."""
    end = end or datetime.utcnow()
    start = start or end - timedelta(days=1)
    return await incidents_crud.get_incidents_by_time_range(session, start, end)
