"""
Demo data: five cameras and a day of incidents spread over all types and severities.

    python -m app.seed --date 2024-01-21
"""
import argparse
import asyncio
import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.base_model import Base
from app.api.v1.cameras.orm import Camera
from app.api.v1.incidents.orm import Incident
from app.api.v1.incidents.schemas import IncidentType, Severity
from app.config import settings
from app.database import DatabaseHelper
from app.utils.log import configure_logging
from app.utils.structures import parse_iso_date

_LOGGER = logging.getLogger(__name__)

DEFAULT_DAY = date(2024, 1, 21)

CAMERAS = [
    ("Shop Floor A", "Main Production Area", "ONLINE"),
    ("Vault Camera", "Security Vault - Level B1", "ONLINE"),
    ("Main Entrance", "Building Entrance - Ground Floor", "ONLINE"),
    ("Parking Lot", "Employee Parking Area", "ONLINE"),
    ("Server Room", "IT Infrastructure - Level 2", "MAINTENANCE"),
]

THUMBNAILS = {
    "GUN_THREAT": "1516321318423-f06f85e504b3",
    "UNAUTHORISED_ACCESS": "1560472354-b33ff0c44a43",
    "FACE_RECOGNISED": "1507003211169-0a1dd7228f2d",
    "SUSPICIOUS_ACTIVITY": "1441986300917-64674bd600d8",
    "MOTION_DETECTION": "1504384308090-c894fdcc538d",
    "EQUIPMENT_TAMPERING": "1581092160562-40aa08e78837",
}

# (camera index, type, hour, minute, duration minutes, severity, resolved, description)
INCIDENTS = [
    (3, "MOTION_DETECTION", 0, 45, 2, "LOW", False, "Vehicle movement detected in parking area"),
    (4, "UNAUTHORISED_ACCESS", 1, 20, 5, "HIGH", False, "Attempted access to server room after hours"),
    (0, "GUN_THREAT", 2, 15, 5, "CRITICAL", False, "Weapon detected on shop floor"),
    (2, "SUSPICIOUS_ACTIVITY", 3, 30, 5, "MEDIUM", True, "Unusual behavior patterns detected"),
    (1, "FACE_RECOGNISED", 4, 10, 1, "LOW", True, "Authorized personnel identified"),
    (3, "EQUIPMENT_TAMPERING", 5, 45, 5, "HIGH", False, "Interference with parking security equipment"),
    (0, "MOTION_DETECTION", 6, 15, 1, "LOW", True, "Normal shift change activity"),
    (2, "FACE_RECOGNISED", 7, 30, 1, "LOW", True, "Employee arrival logged"),
    (1, "UNAUTHORISED_ACCESS", 8, 45, 3, "MEDIUM", False, "Access attempt to restricted vault area"),
    (3, "EQUIPMENT_TAMPERING", 9, 20, 5, "MEDIUM", True, "Maintenance work on security systems"),
    (4, "SUSPICIOUS_ACTIVITY", 10, 30, 5, "MEDIUM", False, "Unusual server room activity patterns"),
    (0, "FACE_RECOGNISED", 11, 15, 1, "LOW", True, "Supervisor identification confirmed"),
    (2, "MOTION_DETECTION", 12, 30, 2, "LOW", True, "Lunch break movement patterns"),
    (1, "GUN_THREAT", 13, 45, 5, "CRITICAL", False, "Potential weapon detected near vault"),
    (3, "UNAUTHORISED_ACCESS", 14, 20, 5, "HIGH", False, "Unauthorized vehicle in restricted parking"),
    (4, "FACE_RECOGNISED", 15, 10, 1, "LOW", True, "IT staff access logged"),
    (0, "SUSPICIOUS_ACTIVITY", 16, 30, 5, "MEDIUM", False, "Unusual production floor activity"),
    (2, "EQUIPMENT_TAMPERING", 17, 45, 3, "LOW", True, "Scheduled maintenance completed"),
    (1, "MOTION_DETECTION", 18, 15, 2, "LOW", True, "End of shift activity"),
    (3, "UNAUTHORISED_ACCESS", 19, 30, 5, "HIGH", False, "After-hours parking lot breach"),
    (4, "GUN_THREAT", 20, 45, 5, "CRITICAL", False, "Security threat in server room area"),
    (0, "FACE_RECOGNISED", 21, 20, 1, "LOW", True, "Night security guard identified"),
    (2, "SUSPICIOUS_ACTIVITY", 22, 10, 5, "MEDIUM", False, "Unusual entrance area activity"),
    (1, "MOTION_DETECTION", 23, 30, 2, "LOW", False, "Late night movement near vault"),
]


def thumbnail_url(incident_type: str) -> str:
    return f"https://images.unsplash.com/photo-{THUMBNAILS[incident_type]}?w=160&h=120&fit=crop"


async def seed(session: AsyncSession, day: date = DEFAULT_DAY) -> tuple[int, int]:
    """Replace all cameras and incidents with the demo set. Returns (cameras, incidents)."""
    await session.execute(delete(Incident))
    await session.execute(delete(Camera))

    cameras = [Camera(name=name, location=location, status=status) for name, location, status in CAMERAS]
    session.add_all(cameras)
    await session.flush()

    for camera_idx, incident_type, hour, minute, duration, severity, resolved, description in INCIDENTS:
        ts_start = datetime.combine(day, time(hour, minute))
        session.add(Incident(
            camera_iid=cameras[camera_idx].iid,
            type=IncidentType[incident_type].value,
            ts_start=ts_start,
            ts_end=ts_start + timedelta(minutes=duration),
            thumbnail_url=thumbnail_url(incident_type),
            severity=Severity[severity].value,
            resolved=resolved,
            description=description,
        ))

    await session.commit()
    _LOGGER.info("Seeded %d cameras and %d incidents for %s", len(cameras), len(INCIDENTS), day.isoformat())
    return len(cameras), len(INCIDENTS)


async def run(db_url: str, day: date) -> None:
    db = DatabaseHelper(url=db_url, echo=settings.db_echo)
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with db.session_factory() as session:
        await seed(session, day)
    await db.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Load demo cameras and incidents.")
    parser.add_argument("--date", type=parse_iso_date, default=DEFAULT_DAY, help="day to place incidents on (YYYY-MM-DD)")
    parser.add_argument("--db-url", default=settings.db_url)
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    asyncio.run(run(args.db_url, args.date))


if __name__ == "__main__":
    main()
