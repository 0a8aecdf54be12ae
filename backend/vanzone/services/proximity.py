"""Nearby-profile discovery: radius queries and zone queries."""

import logging
import math
from collections.abc import Iterable

from vanzone.exceptions import InvalidParameter
from vanzone.schemas.location import Coordinates, NearbyProfile, ZoneCenter
from vanzone.schemas.profile import UserProfile
from vanzone.services.geo import (
    EARTH_RADIUS_KM,
    haversine_distance_km,
    to_zone_center,
    validate_coordinates,
)
from vanzone.services.store import ProfileFilter, ProfileStore
from vanzone.services.visibility import filter_visible, to_nearby_profile

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 50.0

# Absorbs float noise so a profile exactly on the boundary stays included
DISTANCE_TOLERANCE_KM = 1e-9

# Half a zone cell plus slack, for the latitude pre-filter of zone queries
ZONE_HALF_SPAN_DEG = 0.05 + 1e-6


def _require_reference(reference: Coordinates | None) -> Coordinates:
    if reference is None:
        raise InvalidParameter("reference", "a reference point is required")
    return validate_coordinates(reference)


def _require_radius(radius_km: float) -> float:
    if radius_km is None or not math.isfinite(radius_km) or radius_km <= 0:
        raise InvalidParameter("radius_km", "must be a positive number of kilometers")
    return radius_km


def _ranked(items: list[NearbyProfile]) -> list[NearbyProfile]:
    return sorted(items, key=lambda p: (p.distance_km, p.id))


def profiles_within_radius(
    profiles: Iterable[UserProfile],
    reference: Coordinates | None,
    radius_km: float = DEFAULT_RADIUS_KM,
) -> list[NearbyProfile]:
    """Visible profiles within radius_km of reference, nearest first.

    The boundary is inclusive. Distance is measured between exact positions;
    ties are broken by profile id.
    """
    reference = _require_reference(reference)
    radius_km = _require_radius(radius_km)

    matches: list[NearbyProfile] = []
    for profile in filter_visible(profiles):
        distance = haversine_distance_km(reference, profile.exact_location)
        if distance <= radius_km + DISTANCE_TOLERANCE_KM:
            matches.append(to_nearby_profile(profile, distance_km=distance))
    return _ranked(matches)


def profiles_in_zone(
    profiles: Iterable[UserProfile],
    zone_center: ZoneCenter,
    reference: Coordinates | None = None,
) -> list[NearbyProfile]:
    """Visible profiles whose zone is zone_center.

    The requested center is snapped to its own cell first. Distances are
    filled in, and used for ordering, only when a reference is given;
    otherwise members are ordered by id.
    """
    center = to_zone_center(
        Coordinates(latitude=zone_center.latitude, longitude=zone_center.longitude)
    )
    if reference is not None:
        validate_coordinates(reference)

    members: list[NearbyProfile] = []
    for profile in filter_visible(profiles):
        if to_zone_center(profile.exact_location) != center:
            continue
        distance = None
        if reference is not None:
            distance = haversine_distance_km(reference, profile.exact_location)
        members.append(to_nearby_profile(profile, distance_km=distance))

    if reference is not None:
        return _ranked(members)
    return sorted(members, key=lambda p: p.id)


def radius_band(reference: Coordinates, radius_km: float) -> ProfileFilter:
    """Latitude band that contains every point within radius_km of reference."""
    span = math.degrees(radius_km / EARTH_RADIUS_KM) + 1e-9
    south = reference.latitude - span
    north = reference.latitude + span
    return ProfileFilter(
        min_latitude=south if south > -90.0 else None,
        max_latitude=north if north < 90.0 else None,
    )


def zone_band(zone_center: ZoneCenter) -> ProfileFilter:
    """Latitude band that contains every point of a zone cell."""
    return ProfileFilter(
        min_latitude=zone_center.latitude - ZONE_HALF_SPAN_DEG,
        max_latitude=zone_center.latitude + ZONE_HALF_SPAN_DEG,
    )


async def find_nearby(
    store: ProfileStore,
    reference: Coordinates | None,
    radius_km: float = DEFAULT_RADIUS_KM,
) -> list[NearbyProfile]:
    """Radius query against the profile store."""
    reference = _require_reference(reference)
    radius_km = _require_radius(radius_km)

    candidates = await store.list_visible_profiles(radius_band(reference, radius_km))
    results = profiles_within_radius(candidates, reference, radius_km)
    logger.debug(
        "nearby radius=%s candidates=%s results=%s", radius_km, len(candidates), len(results)
    )
    return results


async def find_in_zone(
    store: ProfileStore,
    zone_center: ZoneCenter,
    reference: Coordinates | None = None,
) -> list[NearbyProfile]:
    """Zone query against the profile store."""
    center = to_zone_center(
        Coordinates(latitude=zone_center.latitude, longitude=zone_center.longitude)
    )
    candidates = await store.list_visible_profiles(zone_band(center))
    return profiles_in_zone(candidates, center, reference)
