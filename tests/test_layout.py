"""Unit tests for incident visibility and block layout."""

from datetime import date, datetime

import pytest
from conftest import DAY, make_incident

from app.timeline import layout
from app.timeline.viewport import Viewport

WIDTH = 1200.0


def _full_day() -> Viewport:
    return Viewport(DAY)


def test_camera_rows_are_distinct_and_sorted_by_id(incidents) -> None:
    rows = layout.camera_rows(incidents)

    assert [c.id for c in rows] == [1, 2, 3, 4, 5]


def test_camera_rows_fall_back_to_placeholders_only_when_empty(incidents) -> None:
    assert layout.camera_rows([]) == list(layout.PLACEHOLDER_CAMERAS)

    single = [make_incident(9, datetime(2024, 1, 21, 1), datetime(2024, 1, 21, 2), camera_id=42)]
    assert [c.id for c in layout.camera_rows(single)] == [42]


def test_visible_incidents_filters_by_date_and_viewport(incidents) -> None:
    viewport = _full_day()

    assert [i.id for i in layout.visible_incidents(incidents, viewport)] == [1, 2, 3, 5]

    viewport.set_zoom(2)
    assert [i.id for i in layout.visible_incidents(incidents, viewport)] == [1]


def test_visible_incidents_is_idempotent(incidents) -> None:
    viewport = Viewport(DAY, zoom_index=1, start=datetime(2024, 1, 21, 6, 0))

    first = layout.visible_incidents(incidents, viewport)
    second = layout.visible_incidents(incidents, viewport)

    assert first == second


def test_overlap_is_strict_at_both_edges() -> None:
    viewport = Viewport(DAY, zoom_index=4, start=datetime(2024, 1, 21, 11, 0))
    ends_at_start = make_incident(1, datetime(2024, 1, 21, 10, 0), datetime(2024, 1, 21, 11, 0))
    starts_at_end = make_incident(2, datetime(2024, 1, 21, 12, 0), datetime(2024, 1, 21, 12, 5))
    straddles = make_incident(3, datetime(2024, 1, 21, 10, 50), datetime(2024, 1, 21, 11, 5))

    visible = layout.visible_incidents([ends_at_start, starts_at_end, straddles], viewport)

    assert [i.id for i in visible] == [3]


def test_incident_starting_on_previous_day_is_hidden() -> None:
    overnight = make_incident(1, datetime(2024, 1, 20, 23, 50), datetime(2024, 1, 21, 0, 10))

    assert layout.visible_incidents([overnight], _full_day()) == []


def test_layout_scenario_short_incident_on_first_camera(incidents) -> None:
    viewport = _full_day()
    cameras = layout.camera_rows(incidents)

    blocks = layout.layout_incidents(incidents, cameras, viewport, viewport.axis(WIDTH))
    block = next(b for b in blocks if b.incident_id == 1)

    assert block.row == 0
    assert block.x == pytest.approx(WIDTH * 2.25 / 24)
    assert block.width == layout.MIN_BLOCK_WIDTH
    assert block.y == layout.HEADER_HEIGHT + layout.BLOCK_PADDING
    assert block.height == layout.ROW_HEIGHT - 2 * layout.BLOCK_PADDING
    assert block.label is None


def test_layout_width_label_and_priority_marker() -> None:
    viewport = _full_day()
    long_one = make_incident(1, datetime(2024, 1, 21, 4, 0), datetime(2024, 1, 21, 5, 0),
                             category="Unauthorised Access", severity="high")
    cameras = layout.camera_rows([long_one])

    (block,) = layout.layout_incidents([long_one], cameras, viewport, viewport.axis(WIDTH))

    assert block.width == pytest.approx(WIDTH / 24)
    assert block.label == "Unauthorised"
    assert block.high_priority
    assert block.color == layout.SEVERITY_COLORS["high"]


def test_layout_unknown_camera_goes_to_first_row(incidents) -> None:
    viewport = _full_day()
    stray = make_incident(7, datetime(2024, 1, 21, 3, 0), datetime(2024, 1, 21, 3, 5), camera_id=99)

    (block,) = layout.layout_incidents([stray], layout.camera_rows(incidents), viewport, viewport.axis(WIDTH))

    assert block.row == 0
    assert block.camera_id == 99


def test_layout_marks_selected_block(incidents) -> None:
    viewport = _full_day()
    cameras = layout.camera_rows(incidents)

    blocks = layout.layout_incidents(incidents, cameras, viewport, viewport.axis(WIDTH), selected_id=3)

    assert [b.incident_id for b in blocks if b.selected] == [3]
    assert next(b for b in blocks if b.incident_id == 3).row == 4


def test_incident_color_falls_back_from_severity_to_category_to_gray() -> None:
    start, end = datetime(2024, 1, 21, 1), datetime(2024, 1, 21, 2)

    assert layout.incident_color(make_incident(1, start, end, severity="medium")) == "#ca8a04"
    assert layout.incident_color(make_incident(1, start, end, category="Face Recognised", severity="")) == "#3b82f6"
    assert layout.incident_color(make_incident(1, start, end, category="Loitering", severity="unknown")) == "#6b7280"


def test_short_label_takes_first_token() -> None:
    assert layout.short_label("Equipment Tampering") == "Equipment"
    assert layout.short_label("Loitering") == "Loitering"
    assert layout.short_label("") == ""


def test_time_markers_full_day_every_two_hours() -> None:
    viewport = _full_day()

    markers = layout.time_markers(viewport, viewport.axis(WIDTH))

    assert len(markers) == 13
    assert markers[0].label == "00:00" and markers[0].x == 0.0
    assert markers[-1].x == WIDTH
    assert all(m.is_hour for m in markers)


def test_time_markers_start_at_next_boundary_after_pan() -> None:
    viewport = Viewport(DAY, zoom_index=5)
    viewport.pan_right()

    markers = layout.time_markers(viewport, viewport.axis(WIDTH))

    assert viewport.start == datetime(2024, 1, 21, 0, 7, 30)
    assert [m.label for m in markers] == ["00:10", "00:15", "00:20", "00:25", "00:30", "00:35"]
    assert not markers[0].is_hour


def test_legend_and_quick_jumps(incidents) -> None:
    visible = layout.visible_incidents(incidents, _full_day())

    assert [e.category for e in layout.legend(visible)] == [
        "Gun Threat", "Motion Detection", "Unauthorised Access", "Face Recognised",
    ]
    assert [(q.incident_id, q.label) for q in layout.quick_jumps(visible)] == [
        (1, "02:15 - Gun"),
        (3, "20:45 - Unauthorised"),
    ]


def test_quick_jumps_are_limited() -> None:
    many = [
        make_incident(i, datetime(2024, 1, 21, i, 0), datetime(2024, 1, 21, i, 5))
        for i in range(1, 6)
    ]

    assert len(layout.quick_jumps(many)) == layout.QUICK_JUMP_LIMIT


def test_marker_interval_thresholds() -> None:
    viewport = Viewport(date(2024, 1, 21))
    expected = [120, 60, 30, 30, 5, 5]

    for index, minutes in enumerate(expected):
        viewport.set_zoom(index)
        assert layout.marker_interval(viewport.duration).total_seconds() == minutes * 60
