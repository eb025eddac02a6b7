"""
Incident layout for the timeline.

Pure functions of (incidents, cameras, viewport, axis). Nothing here keeps
state between calls; the owning timeline recomputes the layout on every
render.
"""
from datetime import timedelta
from typing import Iterable, Optional, Sequence

from .axis import TimeAxis
from .models import (
    IncidentBlock,
    LegendEntry,
    QuickJump,
    TimeMarker,
    TimelineCamera,
    TimelineIncident,
)
from .viewport import Viewport

HEADER_HEIGHT = 50.0
ROW_HEIGHT = 50.0
BLOCK_PADDING = 12.0

MIN_BLOCK_WIDTH = 8.0
LABEL_MIN_WIDTH = 40.0

LEGEND_LIMIT = 6
QUICK_JUMP_LIMIT = 3

SEVERITY_COLORS = {
    "critical": "#dc2626",
    "high": "#ea580c",
    "medium": "#ca8a04",
    "low": "#16a34a",
}

CATEGORY_COLORS = {
    "Gun Threat": "#ef4444",
    "Unauthorised Access": "#f97316",
    "Face Recognised": "#3b82f6",
    "Suspicious Activity": "#eab308",
    "Motion Detection": "#22c55e",
    "Equipment Tampering": "#a855f7",
}

NEUTRAL_COLOR = "#6b7280"

HIGH_PRIORITY_SEVERITIES = frozenset({"critical", "high"})

PLACEHOLDER_CAMERAS: tuple[TimelineCamera, ...] = (
    TimelineCamera(id=1, name="Shop Floor A", location="Main Production Area"),
    TimelineCamera(id=2, name="Vault Camera", location="Security Vault - Level B1"),
    TimelineCamera(id=3, name="Main Entrance", location="Building Entrance - Ground Floor"),
    TimelineCamera(id=4, name="Parking Lot", location="Employee Parking Area"),
    TimelineCamera(id=5, name="Server Room", location="IT Infrastructure - Level 2"),
)


def incident_color(incident: TimelineIncident) -> str:
    severity = (incident.severity or "").lower()
    if severity in SEVERITY_COLORS:
        return SEVERITY_COLORS[severity]
    return CATEGORY_COLORS.get(incident.category, NEUTRAL_COLOR)


def is_high_priority(incident: TimelineIncident) -> bool:
    return (incident.severity or "").lower() in HIGH_PRIORITY_SEVERITIES


def short_label(category: str) -> str:
    tokens = category.split()
    return tokens[0] if tokens else ""


def camera_rows(incidents: Iterable[TimelineIncident]) -> list[TimelineCamera]:
    """
    Distinct cameras of ``incidents`` ordered by id.

    Placeholder cameras are returned only when there are no real cameras,
    the two sets are never mixed.
    """
    cameras: dict[int, TimelineCamera] = {}
    for incident in incidents:
        cameras.setdefault(incident.camera.id, incident.camera)
    if not cameras:
        return list(PLACEHOLDER_CAMERAS)
    return sorted(cameras.values(), key=lambda c: c.id)


def row_index(cameras: Sequence[TimelineCamera], camera_id: int) -> int:
    for index, camera in enumerate(cameras):
        if camera.id == camera_id:
            return index
    return 0


def is_visible(incident: TimelineIncident, viewport: Viewport) -> bool:
    on_selected_date = viewport.day_start <= incident.start < viewport.day_end
    overlaps = incident.start < viewport.end and incident.end > viewport.start
    return on_selected_date and overlaps


def visible_incidents(
    incidents: Iterable[TimelineIncident],
    viewport: Viewport,
) -> list[TimelineIncident]:
    return [incident for incident in incidents if is_visible(incident, viewport)]


def layout_incidents(
    incidents: Iterable[TimelineIncident],
    cameras: Sequence[TimelineCamera],
    viewport: Viewport,
    axis: TimeAxis,
    selected_id: Optional[int] = None,
    min_width: float = MIN_BLOCK_WIDTH,
    label_min_width: float = LABEL_MIN_WIDTH,
) -> list[IncidentBlock]:
    blocks = []
    for incident in visible_incidents(incidents, viewport):
        row = row_index(cameras, incident.camera.id)
        x0 = axis.time_to_x(incident.start)
        x1 = axis.time_to_x(incident.end)
        width = max(min_width, x1 - x0)
        blocks.append(IncidentBlock(
            incident_id=incident.id,
            camera_id=incident.camera.id,
            row=row,
            x=x0,
            y=HEADER_HEIGHT + row * ROW_HEIGHT + BLOCK_PADDING,
            width=width,
            height=ROW_HEIGHT - 2 * BLOCK_PADDING,
            color=incident_color(incident),
            label=short_label(incident.category) if width > label_min_width else None,
            high_priority=is_high_priority(incident),
            selected=selected_id is not None and incident.id == selected_id,
            incident=incident,
        ))
    return blocks


def marker_interval(duration: timedelta) -> timedelta:
    hours = duration.total_seconds() / 3600
    if hours <= 1:
        return timedelta(minutes=5)
    if hours <= 6:
        return timedelta(minutes=30)
    if hours <= 12:
        return timedelta(hours=1)
    return timedelta(hours=2)


def time_markers(viewport: Viewport, axis: TimeAxis) -> list[TimeMarker]:
    """Axis ticks from the first interval boundary at or after the window start."""
    interval = marker_interval(viewport.duration)
    step_minutes = int(interval.total_seconds() // 60)
    start = viewport.start
    current = start.replace(minute=(start.minute // step_minutes) * step_minutes, second=0, microsecond=0)
    while current < start:
        current += interval

    markers = []
    while current <= viewport.end:
        markers.append(TimeMarker(
            time=current,
            x=axis.time_to_x(current),
            label=current.strftime("%H:%M"),
            is_hour=current.minute == 0,
        ))
        current += interval
    return markers


def legend(visible: Sequence[TimelineIncident], limit: int = LEGEND_LIMIT) -> list[LegendEntry]:
    entries: dict[str, LegendEntry] = {}
    for incident in visible:
        if incident.category not in entries:
            entries[incident.category] = LegendEntry(category=incident.category, color=incident_color(incident))
    return list(entries.values())[:limit]


def quick_jumps(visible: Sequence[TimelineIncident], limit: int = QUICK_JUMP_LIMIT) -> list[QuickJump]:
    return [
        QuickJump(
            incident_id=incident.id,
            label=f"{incident.start:%H:%M} - {short_label(incident.category)}",
        )
        for incident in visible
        if is_high_priority(incident)
    ][:limit]