import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.utils.log import configure_logging
from app.utils.structures import Status, resp
from app.config import Settings, settings as default_settings
from app.database import DatabaseHelper, get_db
from app.api.v1.base_model import Base
from app.api.v1 import router as api_v1_router

_LOGGER = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Incidents",
        "description": (
            "Security incidents detected by the cameras. "
            "`PATCH /{id}/resolve` toggles between active and resolved; "
            "clients apply the change optimistically and revert if the call fails."
        ),
    },
    {
        "name": "Cameras",
        "description": "Camera registry with status (`online`, `offline`, `maintenance`) and incident counts.",
    },
    {
        "name": "Timelines",
        "description": (
            "Incidents by time range and the rendered per-camera timeline "
            "for a day, zoom level and selection."
        ),
    },
    {
        "name": "Stats",
        "description": "Dashboard counters.",
    },
]


def create_app(settings: Settings = default_settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = DatabaseHelper(url=settings.db_url, echo=settings.db_echo)
        async with db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        if settings.seed_on_startup:
            from app.seed import seed

            async with db.session_factory() as session:
                await seed(session)
        app.state.db = db
        _LOGGER.info("%s started, database %s", settings.app_name, db.engine.url.render_as_string(hide_password=True))
        yield
        await db.dispose()

    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_name,
        description=settings.app_description,
        openapi_tags=OPENAPI_TAGS,
        version="1.0.0",
    )
    app.state.settings = settings

    app.include_router(api_v1_router, prefix=settings.api_v1_prefix)

    @app.get("/health")
    async def get_health(request: Request):
        db = get_db(request)
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            async with db.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                version = conn.dialect.server_version_info
        except Exception as exc:
            _LOGGER.warning("Health check failed: %s", exc)
            return JSONResponse(
                status_code=500,
                content=resp(Status.ERROR, {"status": "unhealthy", "error": str(exc), "timestamp": timestamp}),
            )
        return resp(Status.OK, {
            "status": "healthy",
            "name": settings.app_name,
            "database": {
                "dialect": db.engine.dialect.name,
                "version": ".".join(str(part) for part in version or ()),
            },
            "timestamp": timestamp,
        })

    @app.get("/")
    def root():
        return resp(Status.OK, {"message": f"{settings.app_name} API. See /docs for documentation."})

    return app


configure_logging(default_settings.log_level)
app = create_app()
