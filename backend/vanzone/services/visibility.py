"""Profile visibility rules: what each caller may see of a profile."""

from collections.abc import Iterable

from vanzone.exceptions import NotFound
from vanzone.schemas.location import NearbyProfile
from vanzone.schemas.profile import UserProfile
from vanzone.services.geo import to_zone_center


def is_discoverable(profile: UserProfile) -> bool:
    """Check if a profile may enter plural discovery results."""
    return profile.is_visible and profile.exact_location is not None


def filter_visible(profiles: Iterable[UserProfile]) -> list[UserProfile]:
    """Keep visible profiles that have a position.

    Applies to every caller, the owner included: hidden profiles never
    appear in zone or nearby results.
    """
    return [p for p in profiles if is_discoverable(p)]


def to_nearby_profile(profile: UserProfile, distance_km: float | None = None) -> NearbyProfile:
    """Project a profile for non-owners, replacing the exact position by its zone."""
    zone_center = None
    if profile.exact_location is not None:
        zone_center = to_zone_center(profile.exact_location)
    return NearbyProfile(
        id=profile.id,
        username=profile.username,
        van_name=profile.van_name,
        van_photo_url=profile.van_photo_url,
        zone_center=zone_center,
        city=profile.city,
        main_specialty=profile.main_specialty,
        skills=list(profile.skills),
        days_on_road=profile.days_on_road,
        distance_km=distance_km,
        last_location_update=profile.last_location_update,
    )


def project_for_caller(
    profile: UserProfile | None, profile_id: str, caller_id: str | None
) -> UserProfile | NearbyProfile:
    """Apply the visibility rules to a single-profile lookup.

    The owner gets the full profile. Anyone else gets the blurred
    projection, or NotFound when the profile is absent or hidden.
    """
    if profile is None:
        raise NotFound(profile_id)
    if caller_id is not None and caller_id == profile.id:
        return profile
    if not profile.is_visible:
        raise NotFound(profile_id)
    return to_nearby_profile(profile)
