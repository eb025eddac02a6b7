import asyncio
import logging
from datetime import date
from typing import Optional

from app.config import Settings, settings as default_settings
from app.timeline import IncidentTimeline, TimelineIncident
from app.timeline.viewport import noon_of
from app.utils.structures import parse_iso_date
from .client import DashboardClient, DashboardClientError
from .store import IncidentStore

_LOGGER = logging.getLogger(__name__)


class DashboardHost:
    """
    Page-level state shared by the incident list and the timeline.

    Owns the incident store, the selected date and incident, the current
    playback time reported by the timeline, and the camera poller.
    """

    def __init__(
        self,
        client: DashboardClient,
        today: Optional[date] = None,
        settings: Settings = default_settings,
    ):
        self.client = client
        self.settings = settings
        self.selected_date = today or date.today()
        self.current_time = noon_of(self.selected_date).isoformat()
        self.cameras: list[dict] = []
        self._camera_task: Optional[asyncio.Task] = None

        self.store = IncidentStore(
            client.fetch_incidents,
            client.resolve_incident,
            throttle_sec=settings.incident_fetch_throttle_sec,
            on_change=self._incidents_changed,
        )
        self.timeline = IncidentTimeline(
            selected_date=self.selected_date,
            on_time_change=self.handle_time_change,
            on_incident_select=self.handle_incident_select,
            on_date_change=self.handle_date_change,
            width=settings.timeline_width,
            min_block_width=settings.timeline_min_block_width,
            label_min_width=settings.timeline_label_min_width,
        )

    @property
    def selected_incident(self) -> Optional[TimelineIncident]:
        return self.store.selected

    def _cameras_with_status(self, status: str) -> int:
        return sum(1 for camera in self.cameras if str(camera.get("status", "")).lower() == status)

    @property
    def online_cameras(self) -> int:
        return self._cameras_with_status("online")

    @property
    def maintenance_cameras(self) -> int:
        return self._cameras_with_status("maintenance")

    async def start(self) -> None:
        await self.store.refresh(force=True)
        self.start_camera_polling()

    async def stop(self) -> None:
        try:
            await self.stop_camera_polling()
        finally:
            self.timeline.close()

    def _incidents_changed(self) -> None:
        self.timeline.set_incidents(self.store.incidents)
        if self.timeline.selected is not None:
            self.timeline.selected = self.store.get(self.timeline.selected.id) or self.timeline.selected

    # ---- timeline callbacks ----

    def handle_time_change(self, timestamp: str) -> None:
        self.current_time = timestamp

    def handle_incident_select(self, incident: TimelineIncident) -> None:
        _LOGGER.debug("Incident selected: %s (%s)", incident.id, incident.category)
        self.store.selected = incident
        self.current_time = incident.start.isoformat()
        self.timeline.select_external(incident)

    def handle_date_change(self, value: str) -> bool:
        """
        Validate and apply a YYYY-MM-DD date. Invalid values are dropped.

        The current selection is cleared unless it lies on the new date,
        which is the case when the change comes from focusing it.
        """
        try:
            day = parse_iso_date(value)
        except ValueError:
            _LOGGER.warning("Invalid date: %r", value)
            return False

        self.selected_date = day
        selected = self.store.selected
        if selected is None or selected.start.date() != day:
            self.store.selected = None
            self.timeline.clear_selection()
        self.current_time = noon_of(day).isoformat()
        self.timeline.sync_date(day)
        return True

    # ---- list actions ----

    def select_incident(self, incident_id: int) -> Optional[TimelineIncident]:
        incident = self.store.get(incident_id)
        if incident is not None:
            self.handle_incident_select(incident)
        return incident

    async def resolve_incident(self, incident_id: int) -> Optional[bool]:
        return await self.store.toggle_resolved(incident_id)

    async def refresh(self, force: bool = False) -> bool:
        return await self.store.refresh(force=force)

    # ---- camera polling ----

    async def refresh_cameras(self) -> bool:
        try:
            self.cameras = await self.client.fetch_cameras()
        except DashboardClientError as exc:
            _LOGGER.warning("Error fetching cameras: %s", exc)
            return False
        return True

    async def _poll_cameras(self) -> None:
        while True:
            await self.refresh_cameras()
            await asyncio.sleep(self.settings.camera_poll_interval_sec)

    def start_camera_polling(self) -> None:
        if self._camera_task is None or self._camera_task.done():
            self._camera_task = asyncio.get_running_loop().create_task(self._poll_cameras())

    async def stop_camera_polling(self) -> None:
        task, self._camera_task = self._camera_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            _LOGGER.exception("Camera polling had stopped with an error")
