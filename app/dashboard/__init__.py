from .client import DashboardClient, DashboardClientError
from .host import DashboardHost
from .store import IncidentStore, incident_from_payload
