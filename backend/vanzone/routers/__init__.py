"""API routers."""

from vanzone.routers.discovery import router as discovery_router
from vanzone.routers.health import router as health_router
from vanzone.routers.metrics import router as metrics_router
from vanzone.routers.profiles import router as profiles_router
from vanzone.routers.skills import router as skills_router

__all__ = [
    "discovery_router",
    "health_router",
    "metrics_router",
    "profiles_router",
    "skills_router",
]
