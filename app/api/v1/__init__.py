from fastapi import APIRouter

from .cameras.views import router as cameras_router
from .incidents.views import router as incidents_router
from .timelines.views import router as timelines_router
from .stats.views import router as stats_router

router = APIRouter()
router.include_router(cameras_router)
router.include_router(incidents_router)
router.include_router(timelines_router)
router.include_router(stats_router)
