"""Tests for coordinate validation, zone blurring and haversine distance."""

import math

import pytest

from vanzone.exceptions import ErrorKind, InvalidCoordinate
from vanzone.schemas.location import Coordinates, ZoneCenter
from vanzone.services.geo import (
    EARTH_RADIUS_KM,
    haversine_distance_km,
    is_valid_coordinates,
    to_zone_center,
    validate_coordinates,
)

PARIS = Coordinates(latitude=48.8566, longitude=2.3522)
LONDON = Coordinates(latitude=51.5074, longitude=-0.1278)


def _is_tenth(value: float) -> bool:
    return abs(value * 10 - round(value * 10)) < 1e-9


class TestValidateCoordinates:
    """Tests for coordinate range checks."""

    @pytest.mark.parametrize(
        "latitude,longitude",
        [(0.0, 0.0), (90.0, 180.0), (-90.0, -180.0), (48.8566, 2.3522)],
    )
    def test_accepts_in_range(self, latitude, longitude):
        """Coordinates inside the documented ranges (edges included) are valid."""
        assert is_valid_coordinates(latitude, longitude) is True
        c = Coordinates(latitude=latitude, longitude=longitude)
        assert validate_coordinates(c) is c

    @pytest.mark.parametrize(
        "latitude,longitude",
        [
            (90.0001, 0.0),
            (-91.0, 0.0),
            (0.0, 180.5),
            (0.0, -181.0),
            (math.nan, 0.0),
            (0.0, math.inf),
        ],
    )
    def test_rejects_out_of_range(self, latitude, longitude):
        """Out-of-range or non-finite values raise InvalidCoordinate."""
        with pytest.raises(InvalidCoordinate) as exc_info:
            validate_coordinates(Coordinates(latitude=latitude, longitude=longitude))
        assert exc_info.value.kind == ErrorKind.INVALID_COORDINATE


class TestToZoneCenter:
    """Tests for blurring exact coordinates to a zone center."""

    def test_rounds_to_one_decimal(self):
        """Each axis is rounded to the nearest 0.1."""
        center = to_zone_center(Coordinates(latitude=48.856, longitude=2.342))
        assert center == ZoneCenter(latitude=48.9, longitude=2.3)

    def test_same_cell_same_center(self):
        """Two positions in one cell produce the identical center."""
        a = to_zone_center(Coordinates(latitude=48.856, longitude=2.342))
        b = to_zone_center(Coordinates(latitude=48.859, longitude=2.348))
        assert a == b

    def test_neighbouring_cells_differ(self):
        """2.352 rounds up to 2.4, into the next cell east."""
        center = to_zone_center(Coordinates(latitude=48.856, longitude=2.352))
        assert center == ZoneCenter(latitude=48.9, longitude=2.4)

    def test_half_rounds_away_from_zero(self):
        """Ties round away from zero on both sides of the origin."""
        assert to_zone_center(Coordinates(latitude=48.85, longitude=2.25)) == ZoneCenter(
            latitude=48.9, longitude=2.3
        )
        assert to_zone_center(Coordinates(latitude=-48.85, longitude=-2.25)) == ZoneCenter(
            latitude=-48.9, longitude=-2.3
        )

    def test_small_negative_becomes_zero(self):
        """Values rounding to zero give 0.0, never -0.0."""
        center = to_zone_center(Coordinates(latitude=-0.04, longitude=-0.01))
        assert math.copysign(1.0, center.latitude) == 1.0
        assert math.copysign(1.0, center.longitude) == 1.0

    def test_antimeridian_cell_has_one_center(self):
        """Both sides of the antimeridian cell map to longitude -180."""
        east = to_zone_center(Coordinates(latitude=10.0, longitude=179.97))
        west = to_zone_center(Coordinates(latitude=10.0, longitude=-179.97))
        assert east == west
        assert east.longitude == -180.0

    @pytest.mark.parametrize(
        "latitude,longitude",
        [(48.8566, 2.3522), (-33.8688, 151.2093), (89.99, -179.99), (0.05, 0.05), (-12.34, 56.78)],
    )
    def test_center_is_multiple_of_tenth(self, latitude, longitude):
        """Both axes of a zone center are multiples of 0.1."""
        center = to_zone_center(Coordinates(latitude=latitude, longitude=longitude))
        assert _is_tenth(center.latitude)
        assert _is_tenth(center.longitude)

    def test_rejects_invalid(self):
        """Out-of-range input fails with InvalidCoordinate."""
        with pytest.raises(InvalidCoordinate):
            to_zone_center(Coordinates(latitude=95.0, longitude=0.0))


class TestHaversineDistance:
    """Tests for great-circle distance."""

    @pytest.mark.parametrize("point", [PARIS, LONDON, Coordinates(latitude=90.0, longitude=0.0)])
    def test_zero_for_same_point(self, point):
        """Distance from a point to itself is zero."""
        assert haversine_distance_km(point, point) == 0.0

    def test_symmetric(self):
        """Distance does not depend on argument order."""
        assert haversine_distance_km(PARIS, LONDON) == haversine_distance_km(LONDON, PARIS)

    def test_paris_london(self):
        """Paris to London is about 343.5 km."""
        assert haversine_distance_km(PARIS, LONDON) == pytest.approx(343.5, abs=0.5)

    def test_across_antimeridian_is_short(self):
        """Points either side of the antimeridian are close, not half a world apart."""
        a = Coordinates(latitude=0.0, longitude=179.95)
        b = Coordinates(latitude=0.0, longitude=-179.95)
        expected = EARTH_RADIUS_KM * math.radians(0.1)
        assert haversine_distance_km(a, b) == pytest.approx(expected, abs=1e-6)

    def test_at_pole_longitude_is_irrelevant(self):
        """All longitudes at a pole are the same place."""
        a = Coordinates(latitude=90.0, longitude=0.0)
        b = Coordinates(latitude=90.0, longitude=135.0)
        assert haversine_distance_km(a, b) == pytest.approx(0.0, abs=1e-9)

    def test_antipodes(self):
        """Antipodal points are half the circumference apart."""
        a = Coordinates(latitude=0.0, longitude=0.0)
        b = Coordinates(latitude=0.0, longitude=180.0)
        assert haversine_distance_km(a, b) == pytest.approx(math.pi * EARTH_RADIUS_KM, abs=1e-6)
