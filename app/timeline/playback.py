import asyncio
import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from .axis import TimeAxis

_LOGGER = logging.getLogger(__name__)

PLAYBACK_SPEEDS: tuple[float, ...] = (0.5, 1.0, 2.0, 4.0)
TICK_INTERVAL_SEC = 1.0

FINE_STEP = timedelta(minutes=1)
COARSE_STEP = timedelta(minutes=5)
FINE_ZOOM_LIMIT = timedelta(hours=1)


class ScrubberState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    PLAYING = "playing"


def tick_increment(zoom_duration: timedelta, speed: float) -> timedelta:
    """Cursor advance per tick: 1 min at 1h zoom or finer, 5 min above, times speed."""
    step = FINE_STEP if zoom_duration <= FINE_ZOOM_LIMIT else COARSE_STEP
    return step * speed


def nearest_speed(speed: float) -> float:
    return min(PLAYBACK_SPEEDS, key=lambda allowed: abs(allowed - speed))


class PlaybackScrubber:
    """
    Current-time cursor of the timeline.

    Idle, dragging and playing are mutually exclusive: starting a drag stops
    playback and starting playback ends a drag.
    """

    def __init__(self, cursor: datetime, speed: float = 1.0):
        self.cursor = cursor
        self.state = ScrubberState.IDLE
        self.speed = nearest_speed(speed)

    @property
    def playing(self) -> bool:
        return self.state is ScrubberState.PLAYING

    @property
    def dragging(self) -> bool:
        return self.state is ScrubberState.DRAGGING

    def set_speed(self, speed: float) -> float:
        self.speed = nearest_speed(speed)
        return self.speed

    def play(self) -> None:
        self.state = ScrubberState.PLAYING

    def stop(self) -> None:
        if self.playing:
            self.state = ScrubberState.IDLE

    def begin_drag(self) -> None:
        self.state = ScrubberState.DRAGGING

    def end_drag(self) -> None:
        if self.dragging:
            self.state = ScrubberState.IDLE

    def set_cursor(self, moment: datetime) -> None:
        self.cursor = moment

    def seek(self, x: float, axis: TimeAxis) -> Optional[datetime]:
        """Click-to-seek. Ignored while a drag is in progress."""
        if self.dragging:
            return None
        self.cursor = axis.x_to_time(x)
        return self.cursor

    def drag_to(self, x: float, axis: TimeAxis) -> Optional[datetime]:
        if not self.dragging:
            return None
        self.cursor = axis.x_to_time(max(0.0, min(axis.width, x)))
        return self.cursor

    def tick(self, zoom_duration: timedelta, viewport_end: datetime) -> Optional[datetime]:
        """
        Advance one tick. Returns the new cursor, or None when not playing
        or when the step would pass ``viewport_end`` (playback then stops
        and the cursor stays put).
        """
        if not self.playing:
            return None
        candidate = self.cursor + tick_increment(zoom_duration, self.speed)
        if candidate > viewport_end:
            self.state = ScrubberState.IDLE
            _LOGGER.debug("Playback reached viewport end at %s", self.cursor.isoformat())
            return None
        self.cursor = candidate
        return candidate


class PlaybackTicker:
    """
    Cancellable repeating timer calling ``on_tick`` until it returns False.

    If ``on_tick`` raises, the error is logged, the loop ends and ``on_error``
    is called so the owner can leave the playing state.
    """

    def __init__(
        self,
        on_tick: Callable[[], bool],
        interval: float = TICK_INTERVAL_SEC,
        on_error: Optional[Callable[[], None]] = None,
    ):
        self._on_tick = on_tick
        self._on_error = on_error
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        if self.running:
            return True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            _LOGGER.debug("No running event loop; playback ticks must be driven manually")
            return False
        self._task = loop.create_task(self._run())
        return True

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                if not self._on_tick():
                    break
            except Exception:
                _LOGGER.exception("Playback tick failed, stopping playback")
                if self._on_error is not None:
                    self._on_error()
                break
