"""API tests against a freshly seeded sqlite database."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from app.api.v1.incidents.schemas import IncidentBase, IncidentType, Severity
from app.seed import CAMERAS, INCIDENTS

API = "/api/v1"


def _data(response):
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"] == "OK"
    return body["data"]


def _incident_id_at(client, hhmm: str) -> int:
    incidents = _data(client.get(f"{API}/incidents/all"))
    return next(i["iid"] for i in incidents if i["ts_start"].endswith(f"T{hhmm}:00"))


def test_health_reports_database(client) -> None:
    data = _data(client.get("/health"))

    assert data["status"] == "healthy"
    assert data["database"]["dialect"] == "sqlite"


def test_list_cameras_sorted_with_counts(client) -> None:
    cameras = _data(client.get(f"{API}/cameras/"))

    assert [c["name"] for c in cameras] == sorted(name for name, _, _ in CAMERAS)
    assert sum(c["incident_count"] for c in cameras) == len(INCIDENTS)
    assert next(c for c in cameras if c["name"] == "Server Room")["status"] == "maintenance"


def test_update_camera_status(client) -> None:
    camera = _data(client.get(f"{API}/cameras/"))[0]

    updated = _data(client.patch(f"{API}/cameras/{camera['iid']}/status", json={"status": "offline"}))
    assert updated["status"] == "offline"

    bad = client.patch(f"{API}/cameras/{camera['iid']}/status", json={"status": "exploded"})
    assert bad.status_code == 400

    missing = client.patch(f"{API}/cameras/999/status", json={"status": "online"})
    assert missing.status_code == 404


def test_all_incidents_newest_first_in_display_form(client) -> None:
    incidents = _data(client.get(f"{API}/incidents/all"))

    assert len(incidents) == len(INCIDENTS)
    starts = [i["ts_start"] for i in incidents]
    assert starts == sorted(starts, reverse=True)
    first = incidents[0]
    assert first["type"] == "Motion Detection"
    assert first["severity"] == "low"
    assert first["camera"]["name"] == "Vault Camera"
    assert first["camera"]["status"] == "online"


def test_filter_incidents_by_resolution(client) -> None:
    resolved = _data(client.get(f"{API}/incidents/", params={"resolved": "true"}))
    active = _data(client.get(f"{API}/incidents/", params={"resolved": "false"}))

    expected_resolved = sum(1 for row in INCIDENTS if row[6])
    assert len(resolved) == expected_resolved
    assert len(active) == len(INCIDENTS) - expected_resolved
    assert all(i["resolved"] for i in resolved)


def test_resolve_toggles_and_404s(client) -> None:
    iid = _incident_id_at(client, "02:15")

    first = _data(client.patch(f"{API}/incidents/{iid}/resolve"))
    second = _data(client.patch(f"{API}/incidents/{iid}/resolve"))

    assert first["resolved"] is True
    assert second["resolved"] is False
    assert _data(client.get(f"{API}/incidents/{iid}"))["resolved"] is False
    assert client.patch(f"{API}/incidents/9999/resolve").status_code == 404
    assert client.get(f"{API}/incidents/9999").status_code == 404


def test_stats(client) -> None:
    stats = _data(client.get(f"{API}/stats/"))

    assert stats["total_incidents"] == len(INCIDENTS)
    assert stats["unresolved_incidents"] == sum(1 for row in INCIDENTS if not row[6])
    assert stats["critical_incidents"] == 3
    counts = [item["count"] for item in stats["incidents_by_severity"]]
    assert counts == sorted(counts, reverse=True)
    assert {item["severity"] for item in stats["incidents_by_severity"]} == {"low", "medium", "high", "critical"}
    assert "Gun Threat" in {item["type"] for item in stats["incidents_by_type"]}


def test_timeline_range_oldest_first(client) -> None:
    incidents = _data(client.get(
        f"{API}/timelines/",
        params={"start": "2024-01-21T00:00:00", "end": "2024-01-21T06:00:00"},
    ))

    assert [i["ts_start"][11:16] for i in incidents] == ["00:45", "01:20", "02:15", "03:30", "04:10", "05:45"]


def test_timeline_view_full_day(client) -> None:
    frame = _data(client.get(f"{API}/timelines/view", params={"date": "2024-01-21"}))

    assert frame["zoom_label"] == "24h"
    assert len(frame["cameras"]) == len(CAMERAS)
    assert len(frame["blocks"]) == len(INCIDENTS)
    assert len(frame["legend"]) == 6
    assert [q["label"] for q in frame["quick_jumps"]] == [
        "20:45 - Gun",
        "19:30 - Unauthorised",
        "14:20 - Unauthorised",
    ]


def test_timeline_view_zoomed_window(client) -> None:
    frame = _data(client.get(
        f"{API}/timelines/view",
        params={"date": "2024-01-21", "zoom": 2, "start": "2024-01-21T06:00:00"},
    ))

    assert frame["viewport_start"] == "2024-01-21T06:00:00"
    assert frame["viewport_end"] == "2024-01-21T12:00:00"
    assert len(frame["blocks"]) == 6


def test_timeline_view_focuses_selected_incident_on_other_day(client) -> None:
    iid = _incident_id_at(client, "13:45")

    frame = _data(client.get(
        f"{API}/timelines/view",
        params={"date": "2024-01-22", "zoom": 2, "selected": iid},
    ))

    assert frame["selected_date"] == "2024-01-21"
    assert frame["viewport_start"] == "2024-01-21T10:00:00"
    assert frame["cursor"] == "2024-01-21T13:45:00"
    assert [b["incident_id"] for b in frame["blocks"] if b["selected"]] == [iid]


def test_timeline_view_rejects_bad_dates_and_unknown_selection(client) -> None:
    assert client.get(f"{API}/timelines/view", params={"date": "21-01-2024"}).status_code == 422
    assert client.get(f"{API}/timelines/view", params={"date": "2024-02-30"}).status_code == 422
    assert client.get(f"{API}/timelines/view", params={"date": "2024-01-21", "zoom": 9}).status_code == 422
    assert client.get(
        f"{API}/timelines/view", params={"date": "2024-01-21", "selected": 9999}
    ).status_code == 404


def test_incident_schema_types_and_display_form() -> None:
    fields = dict(
        camera_iid=1,
        ts_start=datetime(2024, 1, 21, 2, 15),
        ts_end=datetime(2024, 1, 21, 2, 20),
    )
    incident = IncidentBase(type="GUN_THREAT", severity="CRITICAL", **fields)

    assert incident.type is IncidentType.GUN_THREAT
    assert incident.severity is Severity.CRITICAL
    dumped = incident.model_dump()
    assert dumped["type"] == "Gun Threat"
    assert dumped["severity"] == "critical"

    with pytest.raises(ValidationError):
        IncidentBase(type="ALIEN_INVASION", severity="LOW", **fields)
