"""Shared fixtures for the incident dashboard tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.timeline import TimelineCamera, TimelineIncident

DAY = date(2024, 1, 21)

CAMERAS = {
    cid: TimelineCamera(id=cid, name=f"Camera {cid}", location=f"Zone {cid}")
    for cid in range(1, 6)
}


def make_incident(
    iid: int,
    start: datetime,
    end: datetime,
    camera_id: int = 1,
    category: str = "Gun Threat",
    severity: str = "critical",
) -> TimelineIncident:
    return TimelineIncident(
        id=iid,
        category=category,
        start=start,
        end=end,
        severity=severity,
        camera=CAMERAS.get(camera_id, TimelineCamera(id=camera_id, name=f"Camera {camera_id}")),
    )


@pytest.fixture
def incidents() -> list[TimelineIncident]:
    return [
        make_incident(1, datetime(2024, 1, 21, 2, 15), datetime(2024, 1, 21, 2, 20), camera_id=1),
        make_incident(2, datetime(2024, 1, 21, 13, 45), datetime(2024, 1, 21, 13, 50), camera_id=2,
                      category="Motion Detection", severity="low"),
        make_incident(3, datetime(2024, 1, 21, 20, 45), datetime(2024, 1, 21, 20, 50), camera_id=5,
                      category="Unauthorised Access", severity="high"),
        make_incident(4, datetime(2024, 1, 22, 9, 30), datetime(2024, 1, 22, 9, 40), camera_id=3,
                      category="Suspicious Activity", severity="medium"),
        make_incident(5, datetime(2024, 1, 21, 7, 30), datetime(2024, 1, 21, 7, 31), camera_id=4,
                      category="Face Recognised", severity="low"),
    ]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(db_url=f"sqlite+aiosqlite:///{tmp_path}/test.db", seed_on_startup=True)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
