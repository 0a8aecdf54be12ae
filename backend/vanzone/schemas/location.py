"""Schemas for positions, zones and discovery results."""

import math
from datetime import datetime

from pydantic import BaseModel, Field

from vanzone.models.profile import Skill


class Coordinates(BaseModel):
    """An exact position. Owner-only, never sent to other users."""

    model_config = {"frozen": True}

    latitude: float
    longitude: float


class ZoneCenter(BaseModel):
    """Center of a 0.1 degree cell, the only position shown to non-owners."""

    model_config = {"frozen": True}

    latitude: float
    longitude: float


class MapBounds(BaseModel):
    """Map viewport. A west edge greater than the east edge crosses the antimeridian."""

    north: float
    south: float
    east: float
    west: float

    def is_valid(self) -> bool:
        """Check that every edge is finite, in range and south <= north."""
        edges = (self.north, self.south, self.east, self.west)
        if not all(math.isfinite(edge) for edge in edges):
            return False
        if not (-90.0 <= self.south <= self.north <= 90.0):
            return False
        return -180.0 <= self.west <= 180.0 and -180.0 <= self.east <= 180.0

    def contains(self, center: ZoneCenter) -> bool:
        """Check whether a zone center lies inside the viewport (edges inclusive)."""
        if not self.south <= center.latitude <= self.north:
            return False
        # Zone centers on the antimeridian are stored as -180; 180 is the same meridian
        if center.longitude == -180.0:
            return self._contains_longitude(-180.0) or self._contains_longitude(180.0)
        return self._contains_longitude(center.longitude)

    def _contains_longitude(self, longitude: float) -> bool:
        if self.west <= self.east:
            return self.west <= longitude <= self.east
        return longitude >= self.west or longitude <= self.east


class NearbyProfile(BaseModel):
    """Profile as seen by other users: blurred zone instead of exact position."""

    id: str
    username: str
    van_name: str | None = None
    van_photo_url: str | None = None
    zone_center: ZoneCenter | None = None
    city: str | None = None
    main_specialty: Skill | None = None
    skills: list[Skill] = Field(default_factory=list)
    days_on_road: int = 0
    distance_km: float | None = None
    last_location_update: datetime | None = None


class MapZone(BaseModel):
    """Group of visible profiles sharing a zone center."""

    center: ZoneCenter
    count: int = Field(..., ge=1)
    members: list[NearbyProfile] | None = None
