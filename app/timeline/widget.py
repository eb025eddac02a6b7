import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from . import layout
from .axis import DEFAULT_WIDTH, TimeAxis
from .models import TimelineCamera, TimelineFrame, TimelineIncident
from .playback import TICK_INTERVAL_SEC, PlaybackScrubber, PlaybackTicker
from .viewport import Viewport, noon_of

_LOGGER = logging.getLogger(__name__)

TimeCallback = Callable[[str], None]
IncidentCallback = Callable[[TimelineIncident], None]
DateCallback = Callable[[str], None]


def _noop(*_args) -> None:
    return None


class IncidentTimeline:
    """
    Per-camera incident timeline.

    Owns the viewport, the playback cursor and the current selection, and
    reports changes to the host through three callbacks:

    * ``on_time_change(iso_instant)`` on seek, drag, tick and focus
    * ``on_incident_select(incident)`` on block clicks and quick jumps
    * ``on_date_change("YYYY-MM-DD")`` on date picker changes and when
      focusing an incident on another day

    Callbacks are advisory; the host treats them as last-write-wins.
    Any manual navigation (zoom, pan, date) stops playback.
    """

    def __init__(
        self,
        incidents: Iterable[TimelineIncident] = (),
        *,
        selected_date: Optional[date] = None,
        on_time_change: Optional[TimeCallback] = None,
        on_incident_select: Optional[IncidentCallback] = None,
        on_date_change: Optional[DateCallback] = None,
        width: float = DEFAULT_WIDTH,
        min_block_width: float = layout.MIN_BLOCK_WIDTH,
        label_min_width: float = layout.LABEL_MIN_WIDTH,
        tick_interval: float = TICK_INTERVAL_SEC,
    ):
        self.incidents: list[TimelineIncident] = list(incidents)
        self.width = width
        self.min_block_width = min_block_width
        self.label_min_width = label_min_width
        self.selected: Optional[TimelineIncident] = None

        self._on_time_change = on_time_change or _noop
        self._on_incident_select = on_incident_select or _noop
        self._on_date_change = on_date_change or _noop

        day = selected_date or date.today()
        self.viewport = Viewport(day)
        self.scrubber = PlaybackScrubber(noon_of(day))
        self._ticker = PlaybackTicker(self.tick, interval=tick_interval, on_error=self.scrubber.stop)

    # ---- derived state ----

    @property
    def selected_date(self) -> date:
        return self.viewport.selected_date

    @property
    def cursor(self) -> datetime:
        return self.scrubber.cursor

    @property
    def playing(self) -> bool:
        return self.scrubber.playing

    @property
    def ticking(self) -> bool:
        return self._ticker.running

    @property
    def axis(self) -> TimeAxis:
        return self.viewport.axis(self.width)

    @property
    def cameras(self) -> list[TimelineCamera]:
        return layout.camera_rows(self.incidents)

    def visible_incidents(self) -> list[TimelineIncident]:
        return layout.visible_incidents(self.incidents, self.viewport)

    def set_incidents(self, incidents: Iterable[TimelineIncident]) -> None:
        self.incidents = list(incidents)

    # ---- notifications ----

    def _notify_time(self, moment: datetime) -> None:
        self._on_time_change(moment.isoformat())

    def _notify_date(self, day: date) -> None:
        self._on_date_change(day.isoformat())

    # ---- viewport navigation ----

    def _stop_playback(self) -> None:
        self.scrubber.stop()
        self._ticker.cancel()

    def zoom_in(self) -> bool:
        self._stop_playback()
        return self.viewport.zoom_in()

    def zoom_out(self) -> bool:
        self._stop_playback()
        return self.viewport.zoom_out()

    def pan_left(self) -> bool:
        self._stop_playback()
        return self.viewport.pan_left()

    def pan_right(self) -> bool:
        self._stop_playback()
        return self.viewport.pan_right()

    def _apply_date(self, day: date) -> None:
        self._stop_playback()
        self.viewport.set_date(day)
        self.scrubber.set_cursor(noon_of(day))
        _LOGGER.debug("Timeline date set to %s", day.isoformat())

    def change_date(self, day: date) -> None:
        """Date picker: switch day and tell the host."""
        self._apply_date(day)
        self._notify_date(day)

    def sync_date(self, day: Optional[date]) -> bool:
        """Host-controlled date. Overwrites internal state when it differs."""
        if day is None or day == self.viewport.selected_date:
            return False
        self._apply_date(day)
        return True

    # ---- playback ----

    def play(self) -> None:
        self.scrubber.play()
        self._ticker.start()

    def pause(self) -> None:
        self._stop_playback()

    def toggle_play(self) -> bool:
        if self.playing:
            self.pause()
        else:
            self.play()
        return self.playing

    def set_speed(self, speed: float) -> float:
        return self.scrubber.set_speed(speed)

    def tick(self) -> bool:
        """One playback step. Returns whether playback continues."""
        moment = self.scrubber.tick(self.viewport.duration, self.viewport.end)
        if moment is None:
            return False
        self._notify_time(moment)
        return True

    def seek(self, x: float) -> Optional[datetime]:
        moment = self.scrubber.seek(x, self.axis)
        if moment is not None:
            self._notify_time(moment)
        return moment

    def begin_drag(self) -> None:
        self._ticker.cancel()
        self.scrubber.begin_drag()

    def drag_to(self, x: float) -> Optional[datetime]:
        moment = self.scrubber.drag_to(x, self.axis)
        if moment is not None:
            self._notify_time(moment)
        return moment

    def end_drag(self) -> None:
        self.scrubber.end_drag()

    def jump_to_start(self) -> None:
        self._stop_playback()
        self.scrubber.set_cursor(self.viewport.start)
        self._notify_time(self.viewport.start)

    def jump_to_end(self) -> None:
        self._stop_playback()
        self.scrubber.set_cursor(self.viewport.end)
        self._notify_time(self.viewport.end)

    # ---- selection and focus ----

    def select_external(self, incident: Optional[TimelineIncident]) -> None:
        """
        Focus an incident selected outside the timeline.

        Switches to the incident's day when needed (one date notification),
        centers the viewport around its start hour and moves the cursor to
        its start. Running it twice for the same incident is a no-op.
        """
        if incident is None:
            self.clear_selection()
            return
        self.selected = incident
        incident_day = incident.start.date()
        if incident_day != self.viewport.selected_date:
            self._apply_date(incident_day)
            self._notify_date(incident_day)
        self.viewport.center_on(incident.start)
        self.scrubber.set_cursor(incident.start)
        self._notify_time(incident.start)

    def jump_to_incident(self, incident: TimelineIncident) -> None:
        self._stop_playback()
        self.selected = incident
        self.scrubber.set_cursor(incident.start)
        self._notify_time(incident.start)
        self._on_incident_select(incident)

    def select_block(self, incident_id: int) -> Optional[TimelineIncident]:
        for incident in self.visible_incidents():
            if incident.id == incident_id:
                self.jump_to_incident(incident)
                return incident
        return None

    def focus_selected(self) -> None:
        if self.selected is not None:
            self.jump_to_incident(self.selected)

    def clear_selection(self) -> None:
        self.selected = None

    def close(self) -> None:
        """Release the playback timer and any drag in progress."""
        self._ticker.cancel()
        self.scrubber.stop()
        self.scrubber.end_drag()

    # ---- rendering ----

    def render(self) -> TimelineFrame:
        axis = self.axis
        cameras = self.cameras
        visible = self.visible_incidents()
        selected_id = self.selected.id if self.selected is not None else None
        return TimelineFrame(
            selected_date=self.viewport.selected_date,
            zoom_index=self.viewport.zoom_index,
            zoom_label=self.viewport.zoom.label,
            viewport_start=self.viewport.start,
            viewport_end=self.viewport.end,
            cursor=self.cursor,
            cursor_x=axis.time_to_x(self.cursor),
            playing=self.playing,
            dragging=self.scrubber.dragging,
            speed=self.scrubber.speed,
            can_zoom_in=self.viewport.can_zoom_in,
            can_zoom_out=self.viewport.can_zoom_out,
            can_pan_left=self.viewport.can_pan_left,
            can_pan_right=self.viewport.can_pan_right,
            width=self.width,
            height=layout.HEADER_HEIGHT + len(cameras) * layout.ROW_HEIGHT,
            cameras=cameras,
            blocks=layout.layout_incidents(
                visible, cameras, self.viewport, axis,
                selected_id=selected_id,
                min_width=self.min_block_width,
                label_min_width=self.label_min_width,
            ),
            markers=layout.time_markers(self.viewport, axis),
            legend=layout.legend(visible),
            quick_jumps=layout.quick_jumps(visible),
            selected_incident_id=selected_id,
        )
