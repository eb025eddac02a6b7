import logging
import time
from datetime import date
from typing import Awaitable, Callable, Optional

from app.timeline import TimelineCamera, TimelineIncident
from app.timeline.viewport import day_bounds
from .client import DashboardClientError

_LOGGER = logging.getLogger(__name__)


def incident_from_payload(data: dict) -> TimelineIncident:
    camera = data["camera"]
    return TimelineIncident(
        id=data["iid"],
        category=data["type"],
        start=data["ts_start"],
        end=data["ts_end"],
        severity=data.get("severity", ""),
        camera=TimelineCamera(id=camera["iid"], name=camera["name"], location=camera.get("location", "")),
        resolved=data.get("resolved", False),
        description=data.get("description"),
        thumbnail_url=data.get("thumbnail_url", ""),
    )


class IncidentStore:
    """
    Client-side incident list.

    Resolution toggles are applied locally first and reverted if the server
    call fails. Fetches closer together than ``throttle_sec`` are skipped
    unless forced.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[list[dict]]],
        resolver: Callable[[int], Awaitable[dict]],
        throttle_sec: float = 5.0,
        on_change: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetcher = fetcher
        self._resolver = resolver
        self.throttle_sec = throttle_sec
        self._on_change = on_change or (lambda: None)
        self._clock = clock
        self._last_fetch: Optional[float] = None
        self.incidents: list[TimelineIncident] = []
        self.selected: Optional[TimelineIncident] = None
        self.resolving: set[int] = set()

    @property
    def active(self) -> list[TimelineIncident]:
        return [i for i in self.incidents if not i.resolved]

    @property
    def resolved(self) -> list[TimelineIncident]:
        return [i for i in self.incidents if i.resolved]

    def get(self, incident_id: int) -> Optional[TimelineIncident]:
        return next((i for i in self.incidents if i.id == incident_id), None)

    def for_date(self, day: date) -> list[TimelineIncident]:
        day_start, day_end = day_bounds(day)
        return [i for i in self.incidents if day_start <= i.start < day_end]

    async def refresh(self, force: bool = False) -> bool:
        now = self._clock()
        if not force and self._last_fetch is not None and now - self._last_fetch < self.throttle_sec:
            _LOGGER.debug("Skipping incident fetch, last one %.1fs ago", now - self._last_fetch)
            return False
        try:
            payload = await self._fetcher()
            incidents = [incident_from_payload(item) for item in payload]
        except (DashboardClientError, KeyError, TypeError, ValueError) as exc:
            _LOGGER.warning("Error fetching incidents: %s", exc)
            self.incidents = []
            self._on_change()
            return False
        self.incidents = incidents
        self._last_fetch = now
        _LOGGER.debug("Fetched %d incidents", len(self.incidents))
        self._on_change()
        return True

    def set_resolved(self, incident_id: int, resolved: bool) -> None:
        self.incidents = [
            i.model_copy(update={"resolved": resolved}) if i.id == incident_id else i
            for i in self.incidents
        ]
        if self.selected is not None and self.selected.id == incident_id:
            self.selected = self.selected.model_copy(update={"resolved": resolved})
        self._on_change()

    async def toggle_resolved(self, incident_id: int) -> Optional[bool]:
        """
        Optimistically flip ``resolved`` and confirm with the server.

        Returns the confirmed state, or None when the incident is unknown,
        already being resolved, or the call failed (the local flip is then
        undone).
        """
        current = self.get(incident_id)
        if current is None or incident_id in self.resolving:
            return None

        previous = current.resolved
        self.set_resolved(incident_id, not previous)
        self.resolving.add(incident_id)
        try:
            confirmed = await self._resolver(incident_id)
        except DashboardClientError as exc:
            _LOGGER.warning("Error resolving incident %s: %s", incident_id, exc)
            self.set_resolved(incident_id, previous)
            return None
        finally:
            self.resolving.discard(incident_id)

        resolved = bool(confirmed.get("resolved", not previous))
        if resolved != (not previous):
            self.set_resolved(incident_id, resolved)
        return resolved
