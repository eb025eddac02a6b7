from pathlib import Path
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    app_name: str = "CCTV Incident Monitor"
    app_description: str = (
        "Dashboard backend for CCTV security incidents. Lists incidents per camera, "
        "lets an operator resolve or reopen them and renders a per-camera timeline "
        "with zoom, pan and playback."
    )
    api_prefix: str = "/api"
    api_v1_prefix: str = f"{api_prefix}/v1"

    db_url: str = f"sqlite+aiosqlite:///{BASE_DIR}/incidents.db"
    db_echo: bool = False

    log_level: str = "INFO"
    seed_on_startup: bool = False

    timeline_width: float = 1200.0
    timeline_min_block_width: float = 8.0
    timeline_label_min_width: float = 40.0

    api_base_url: str = "http://127.0.0.1:8000/api/v1"
    incident_fetch_throttle_sec: float = 5.0
    camera_poll_interval_sec: float = 30.0

    model_config = {"env_file": ".env"}


settings = Settings()
