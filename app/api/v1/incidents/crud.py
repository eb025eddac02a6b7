from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .orm import Incident


async def get_incidents(session: AsyncSession, resolved: bool | None = None) -> list[Incident]:
    stmt = select(Incident)
    if resolved is not None:
        stmt = stmt.where(Incident.resolved == resolved)
    stmt = stmt.order_by(Incident.ts_start.desc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_incident(session: AsyncSession, incident_iid: int) -> Incident | None:
    return await session.get(Incident, incident_iid)


async def get_incidents_by_time_range(
    session: AsyncSession,
    start: datetime,
    end: datetime,
) -> list[Incident]:
    stmt = (
        select(Incident)
        .where(Incident.ts_start >= start, Incident.ts_start <= end)
        .order_by(Incident.ts_start)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def toggle_resolved(session: AsyncSession, incident: Incident) -> Incident:
    incident.resolved = not incident.resolved
    await session.commit()
    await session.refresh(incident)
    return incident


async def get_incident_stats(session: AsyncSession) -> dict:
    total = await session.scalar(select(func.count(Incident.iid)))
    unresolved = await session.scalar(
        select(func.count(Incident.iid)).where(Incident.resolved.is_(False))
    )
    critical = await session.scalar(
        select(func.count(Incident.iid)).where(Incident.severity == "CRITICAL")
    )

    by_type = await session.execute(
        select(Incident.type, func.count(Incident.iid).label("count"))
        .group_by(Incident.type)
        .order_by(func.count(Incident.iid).desc())
    )
    by_severity = await session.execute(
        select(Incident.severity, func.count(Incident.iid).label("count"))
        .group_by(Incident.severity)
        .order_by(func.count(Incident.iid).desc())
    )

    return {
        "total_incidents": total or 0,
        "unresolved_incidents": unresolved or 0,
        "critical_incidents": critical or 0,
        "incidents_by_type": [{"type": t, "count": c} for t, c in by_type.all()],
        "incidents_by_severity": [{"severity": s, "count": c} for s, c in by_severity.all()],
    }
