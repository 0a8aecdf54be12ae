"""Coordinate validation, zone blurring and great-circle distance."""

import math
from decimal import ROUND_HALF_UP, Decimal

from vanzone.exceptions import InvalidCoordinate
from vanzone.schemas.location import Coordinates, ZoneCenter

EARTH_RADIUS_KM = 6371.0

# One decimal degree: ~11 km cells at the equator
ZONE_STEP = Decimal("0.1")


def is_valid_coordinates(latitude: float, longitude: float) -> bool:
    """Check that both axes are finite and inside their ranges."""
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def validate_coordinates(coordinates: Coordinates) -> Coordinates:
    """Return the coordinates unchanged, or raise InvalidCoordinate."""
    if not is_valid_coordinates(coordinates.latitude, coordinates.longitude):
        raise InvalidCoordinate(coordinates.latitude, coordinates.longitude)
    return coordinates


def _round_axis(value: float) -> float:
    # Decimal of repr() avoids binary artifacts: 48.85 rounds to 48.9, not 48.8.
    # ROUND_HALF_UP rounds ties away from zero in both directions.
    return float(Decimal(repr(value)).quantize(ZONE_STEP, rounding=ROUND_HALF_UP))


def to_zone_center(coordinates: Coordinates) -> ZoneCenter:
    """Blur exact coordinates to the center of their 0.1 degree cell.

    Plain decimal rounding per axis, so cells shrink in width towards the
    poles. Longitude 180.0 folds onto -180.0 so the cell straddling the
    antimeridian has a single center.
    """
    validate_coordinates(coordinates)
    latitude = _round_axis(coordinates.latitude)
    longitude = _round_axis(coordinates.longitude)
    if longitude == 180.0:
        longitude = -180.0
    # Normalize -0.0 so equal cells compare and serialize identically
    return ZoneCenter(latitude=latitude + 0.0, longitude=longitude + 0.0)


def haversine_distance_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlng = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # Rounding can push h marginally outside [0, 1] near antipodes
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))
