"""Map zone aggregation."""

import logging
from collections import Counter
from collections.abc import Iterable

from vanzone.schemas.location import Coordinates, MapBounds, MapZone, ZoneCenter
from vanzone.schemas.profile import UserProfile
from vanzone.services.geo import to_zone_center
from vanzone.services.proximity import find_in_zone
from vanzone.services.store import ProfileFilter, ProfileStore
from vanzone.services.visibility import filter_visible

logger = logging.getLogger(__name__)


def aggregate_zones(profiles: Iterable[UserProfile], bounds: MapBounds) -> list[MapZone]:
    """Group visible profiles by zone center and count each group.

    Only zones whose center lies inside the viewport are returned, sorted by
    (latitude, longitude). An invalid viewport yields no zones.
    """
    if not bounds.is_valid():
        return []

    counts: Counter[ZoneCenter] = Counter(
        to_zone_center(profile.exact_location) for profile in filter_visible(profiles)
    )
    zones = [
        MapZone(center=center, count=count)
        for center, count in counts.items()
        if bounds.contains(center)
    ]
    zones.sort(key=lambda z: (z.center.latitude, z.center.longitude))
    return zones


async def list_zones(store: ProfileStore, bounds: MapBounds) -> list[MapZone]:
    """Zones visible in a map viewport, read from the profile store."""
    if not bounds.is_valid():
        logger.debug("Ignoring invalid viewport %s", bounds)
        return []
    # A cell centered on the edge may hold profiles up to half a cell outside
    profile_filter = ProfileFilter(
        min_latitude=bounds.south - 0.05 - 1e-6,
        max_latitude=bounds.north + 0.05 + 1e-6,
    )
    profiles = await store.list_visible_profiles(profile_filter)
    return aggregate_zones(profiles, bounds)


async def expand_zone(
    store: ProfileStore,
    center: ZoneCenter,
    reference: Coordinates | None = None,
) -> MapZone | None:
    """Load the members of one zone; None when nobody visible is there."""
    members = await find_in_zone(store, center, reference)
    if not members:
        return None
    return MapZone(center=members[0].zone_center, count=len(members), members=members)
