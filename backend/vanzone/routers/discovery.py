"""Discovery endpoints: nearby profiles and map zones."""

from fastapi import APIRouter, Depends, Query

from vanzone.config import get_settings
from vanzone.exceptions import InvalidParameter
from vanzone.schemas.location import Coordinates, MapBounds, MapZone, NearbyProfile, ZoneCenter
from vanzone.services.proximity import find_nearby
from vanzone.services.store import ProfileStore, get_profile_store
from vanzone.services.zones import expand_zone, list_zones

router = APIRouter(prefix="/api", tags=["discovery"])


@router.get("/nearby", response_model=list[NearbyProfile])
async def get_nearby_profiles(
    latitude: float,
    longitude: float,
    radius_km: float | None = None,
    store: ProfileStore = Depends(get_profile_store),
) -> list[NearbyProfile]:
    """Visible profiles within radius_km of a point, nearest first."""
    if radius_km is None:
        radius_km = get_settings().default_radius_km
    reference = Coordinates(latitude=latitude, longitude=longitude)
    return await find_nearby(store, reference, radius_km)


@router.get("/zones", response_model=list[MapZone])
async def get_zones(
    north: float,
    south: float,
    east: float,
    west: float,
    store: ProfileStore = Depends(get_profile_store),
) -> list[MapZone]:
    """Occupied zones inside a map viewport, with member counts."""
    bounds = MapBounds(north=north, south=south, east=east, west=west)
    return await list_zones(store, bounds)


@router.get("/zones/members", response_model=MapZone | None)
async def get_zone_members(
    zone_latitude: float,
    zone_longitude: float,
    latitude: float | None = Query(default=None, description="Caller latitude, for distances"),
    longitude: float | None = Query(default=None, description="Caller longitude, for distances"),
    store: ProfileStore = Depends(get_profile_store),
) -> MapZone | None:
    """Expand a tapped zone into its member profiles.

    Returns null when nobody visible is left in the zone.
    """
    if (latitude is None) != (longitude is None):
        raise InvalidParameter("latitude/longitude", "both or neither must be given")
    reference = None
    if latitude is not None:
        reference = Coordinates(latitude=latitude, longitude=longitude)
    center = ZoneCenter(latitude=zone_latitude, longitude=zone_longitude)
    return await expand_zone(store, center, reference)
