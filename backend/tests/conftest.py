"""Shared fixtures: an in-memory profile store and profile factories."""

import itertools
from datetime import UTC, datetime
from typing import Any

import pytest

from vanzone.exceptions import Conflict, NotFound
from vanzone.schemas.location import Coordinates
from vanzone.schemas.profile import UserProfile
from vanzone.services.store import ProfileFilter


class InMemoryProfileStore:
    """ProfileStore kept in a dict, with the same visibility rules as the database."""

    def __init__(self, profiles: list[UserProfile] | None = None):
        self.profiles: dict[str, UserProfile] = {p.id: p for p in profiles or []}
        self.filters: list[ProfileFilter | None] = []
        self.updates: list[tuple[str, dict[str, Any]]] = []

    def add(self, *profiles: UserProfile) -> None:
        for profile in profiles:
            self.profiles[profile.id] = profile

    async def get_profile(self, profile_id: str) -> UserProfile | None:
        profile = self.profiles.get(profile_id)
        return profile.model_copy(deep=True) if profile else None

    async def list_visible_profiles(
        self, profile_filter: ProfileFilter | None = None
    ) -> list[UserProfile]:
        self.filters.append(profile_filter)
        result = []
        for profile in sorted(self.profiles.values(), key=lambda p: p.id):
            if not profile.is_visible or profile.exact_location is None:
                continue
            latitude = profile.exact_location.latitude
            if profile_filter is not None:
                if profile_filter.min_latitude is not None and latitude < profile_filter.min_latitude:
                    continue
                if profile_filter.max_latitude is not None and latitude > profile_filter.max_latitude:
                    continue
            result.append(profile.model_copy(deep=True))
        return result

    async def update_profile_fields(self, profile_id: str, fields: dict[str, Any]) -> None:
        if profile_id not in self.profiles:
            raise NotFound(profile_id)
        self.updates.append((profile_id, dict(fields)))
        current = self.profiles[profile_id]
        data = current.model_dump()
        data.update(fields)
        data["updated_at"] = datetime.now(UTC)
        self.profiles[profile_id] = UserProfile.model_validate(data)

    async def create_profile(self, profile: UserProfile) -> UserProfile:
        if profile.id in self.profiles:
            raise Conflict("Profile or username already exists")
        now = datetime.now(UTC)
        created = profile.model_copy(update={"created_at": now, "updated_at": now})
        self.profiles[profile.id] = created
        return created.model_copy(deep=True)

    async def delete_profile(self, profile_id: str) -> bool:
        return self.profiles.pop(profile_id, None) is not None

    async def username_taken(self, username: str, exclude_id: str | None = None) -> bool:
        return any(
            p.username == username and p.id != exclude_id for p in self.profiles.values()
        )


@pytest.fixture
def make_profile():
    """Factory for profiles with unique ids and usernames."""
    counter = itertools.count(1)

    def _make(
        latitude: float | None = None,
        longitude: float | None = None,
        **overrides: Any,
    ) -> UserProfile:
        n = next(counter)
        location = None
        if latitude is not None and longitude is not None:
            location = Coordinates(latitude=latitude, longitude=longitude)
        data: dict[str, Any] = {
            "id": f"00000000-0000-0000-0000-{n:012d}",
            "username": f"nomad{n}",
            "van_name": f"Van {n}",
            "exact_location": location,
            "is_visible": True,
        }
        data.update(overrides)
        return UserProfile(**data)

    return _make


@pytest.fixture
def store():
    """Empty in-memory profile store."""
    return InMemoryProfileStore()

