import httpx

from app.config import settings

DEFAULT_TIMEOUT = httpx.Timeout(connect=5.0, read=30.0, write=10.0, pool=5.0)


class DashboardClientError(Exception):
    """Any failed call to the incidents API."""


class DashboardClient:
    """Thin async client for the incidents API, one connection per call."""

    def __init__(
        self,
        base_url: str = settings.api_base_url,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _call(self, method: str, path: str, **kwargs) -> dict | list:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPError as exc:
                raise DashboardClientError(f"{method} {path} failed: {exc}") from exc
            except ValueError as exc:
                raise DashboardClientError(f"{method} {path} returned invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise DashboardClientError(f"{method} {path} returned {type(payload).__name__}, expected an envelope")
        if payload.get("status") != "OK":
            raise DashboardClientError(f"{method} {path} returned {payload.get('message')!r}")
        return payload["data"]

    async def fetch_incidents(self) -> list[dict]:
        return await self._call("GET", "/incidents/all", headers={"Cache-Control": "no-cache"})

    async def resolve_incident(self, incident_iid: int) -> dict:
        return await self._call("PATCH", f"/incidents/{incident_iid}/resolve")

    async def fetch_cameras(self) -> list[dict]:
        return await self._call("GET", "/cameras/")
