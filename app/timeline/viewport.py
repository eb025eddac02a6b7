import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .axis import DEFAULT_WIDTH, TimeAxis

_LOGGER = logging.getLogger(__name__)

PAN_FRACTION = 0.25


@dataclass(frozen=True)
class ZoomLevel:
    label: str
    duration: timedelta


ZOOM_LEVELS: tuple[ZoomLevel, ...] = (
    ZoomLevel("24h", timedelta(hours=24)),
    ZoomLevel("12h", timedelta(hours=12)),
    ZoomLevel("6h", timedelta(hours=6)),
    ZoomLevel("3h", timedelta(hours=3)),
    ZoomLevel("1h", timedelta(hours=1)),
    ZoomLevel("30m", timedelta(minutes=30)),
)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Start of ``day`` and the following midnight (exclusive)."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def noon_of(day: date) -> datetime:
    return datetime.combine(day, time(12, 0))


class Viewport:
    """
    Visible window of the timeline.

    The window always lies inside the selected day: ``day_start <= start``
    and ``end <= day_end``. ``end`` is never stored, it is ``start`` plus the
    duration of the current zoom level.

    Navigation methods return True when they changed the state.
    """

    def __init__(self, selected_date: date, zoom_index: int = 0, start: datetime | None = None):
        self._selected_date = selected_date
        self._zoom_index = max(0, min(len(ZOOM_LEVELS) - 1, zoom_index))
        self._start = self.day_start
        if start is not None:
            self.set_start(start)

    @property
    def selected_date(self) -> date:
        return self._selected_date

    @property
    def zoom_index(self) -> int:
        return self._zoom_index

    @property
    def zoom(self) -> ZoomLevel:
        return ZOOM_LEVELS[self._zoom_index]

    @property
    def duration(self) -> timedelta:
        return self.zoom.duration

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def end(self) -> datetime:
        return self._start + self.duration

    @property
    def day_start(self) -> datetime:
        return day_bounds(self._selected_date)[0]

    @property
    def day_end(self) -> datetime:
        return day_bounds(self._selected_date)[1]

    @property
    def pan_step(self) -> timedelta:
        return self.duration * PAN_FRACTION

    @property
    def can_zoom_in(self) -> bool:
        return self._zoom_index < len(ZOOM_LEVELS) - 1

    @property
    def can_zoom_out(self) -> bool:
        return self._zoom_index > 0

    @property
    def can_pan_left(self) -> bool:
        return self._start - self.pan_step >= self.day_start

    @property
    def can_pan_right(self) -> bool:
        return self._start + self.pan_step + self.duration <= self.day_end

    def axis(self, width: float = DEFAULT_WIDTH) -> TimeAxis:
        return TimeAxis(self.start, self.end, width)

    def zoom_in(self) -> bool:
        if not self.can_zoom_in:
            return False
        self._zoom_index += 1
        _LOGGER.debug("Zoomed in to %s", self.zoom.label)
        return True

    def zoom_out(self) -> bool:
        if not self.can_zoom_out:
            return False
        self._zoom_index -= 1
        # a wider window anchored late in the day would spill past midnight
        if self.end > self.day_end:
            self._start = self.day_end - self.duration
        _LOGGER.debug("Zoomed out to %s", self.zoom.label)
        return True

    def set_zoom(self, zoom_index: int) -> bool:
        zoom_index = max(0, min(len(ZOOM_LEVELS) - 1, zoom_index))
        if zoom_index == self._zoom_index:
            return False
        self._zoom_index = zoom_index
        self.set_start(self._start)
        return True

    def pan_left(self) -> bool:
        if not self.can_pan_left:
            return False
        self._start -= self.pan_step
        return True

    def pan_right(self) -> bool:
        if not self.can_pan_right:
            return False
        self._start += self.pan_step
        return True

    def set_date(self, selected_date: date) -> bool:
        changed = selected_date != self._selected_date or self._start != day_bounds(selected_date)[0]
        self._selected_date = selected_date
        self._start = self.day_start
        return changed

    def set_start(self, start: datetime) -> None:
        """Move the window to ``start``, clamped so it stays within the day."""
        latest = self.day_end - self.duration
        self._start = max(self.day_start, min(latest, start))

    def center_on(self, moment: datetime) -> None:
        """
        Center the window on the hour containing ``moment``.

        The start is the top of that hour minus half the zoom duration,
        then clamped into the day; near midnight the window is shifted back
        so the full duration still fits.
        """
        top_of_hour = moment.replace(minute=0, second=0, microsecond=0)
        self.set_start(top_of_hour - self.duration / 2)

    def __repr__(self) -> str:
        return (
            f"Viewport(date={self._selected_date.isoformat()}, zoom={self.zoom.label}, "
            f"start={self._start.isoformat()})"
        )
