"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vanzone.database import get_db
from vanzone.models import Profile

router = APIRouter(tags=["metrics"])


async def collect_metrics(db: AsyncSession) -> bytes:
    """Collect profile counts and return Prometheus format."""
    registry = CollectorRegistry()

    profiles_total = Gauge(
        "vanzone_profiles_total",
        "Number of profiles",
        registry=registry,
    )
    profiles_visible = Gauge(
        "vanzone_profiles_visible",
        "Number of profiles visible in discovery",
        registry=registry,
    )
    profiles_located = Gauge(
        "vanzone_profiles_located",
        "Number of profiles that have reported a position",
        registry=registry,
    )

    total = await db.execute(select(func.count()).select_from(Profile))
    profiles_total.set(total.scalar() or 0)

    visible = await db.execute(
        select(func.count()).select_from(Profile).where(Profile.is_visible.is_(True))
    )
    profiles_visible.set(visible.scalar() or 0)

    located = await db.execute(
        select(func.count())
        .select_from(Profile)
        .where(Profile.latitude.isnot(None))
        .where(Profile.longitude.isnot(None))
    )
    profiles_located.set(located.scalar() or 0)

    return generate_latest(registry)


@router.get("/metrics", response_class=PlainTextResponse)
async def prometheus_metrics(db: AsyncSession = Depends(get_db)) -> PlainTextResponse:
    """Prometheus metrics endpoint."""
    metrics_data = await collect_metrics(db)
    return PlainTextResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
