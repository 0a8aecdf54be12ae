"""Profile store contract and its PostgreSQL implementation."""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from fastapi import Depends
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vanzone.database import get_db, utc_now
from vanzone.exceptions import Conflict, NotFound, StoreUnavailable
from vanzone.models import Profile
from vanzone.schemas.profile import UserProfile

logger = logging.getLogger(__name__)

# Attributes update_profile_fields accepts, besides exact_location
UPDATABLE_FIELDS = frozenset(
    {
        "username",
        "van_name",
        "van_photo_url",
        "city",
        "main_specialty",
        "skills",
        "days_on_road",
        "is_visible",
        "last_location_update",
    }
)


@dataclass(frozen=True)
class ProfileFilter:
    """Optional pre-filter for listing profiles.

    A latitude band is safe to push down for any distance query: it never
    wraps, unlike a longitude band.
    """

    min_latitude: float | None = None
    max_latitude: float | None = None


class ProfileStore(Protocol):
    """Persistence contract the discovery core reads and writes through."""

    async def get_profile(self, profile_id: str) -> UserProfile | None: ...

    async def list_visible_profiles(
        self, profile_filter: ProfileFilter | None = None
    ) -> list[UserProfile]: ...

    async def update_profile_fields(self, profile_id: str, fields: dict[str, Any]) -> None: ...

    async def create_profile(self, profile: UserProfile) -> UserProfile: ...

    async def delete_profile(self, profile_id: str) -> bool: ...

    async def username_taken(self, username: str, exclude_id: str | None = None) -> bool: ...


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class DatabaseProfileStore:
    """ProfileStore backed by the profiles table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_profile(self, profile_id: str) -> UserProfile | None:
        """Load one profile, or None when absent."""
        # Non-UUID ids cannot exist; querying them would raise a DataError
        if not _is_uuid(profile_id):
            return None
        try:
            result = await self._db.execute(select(Profile).where(Profile.id == profile_id))
        except SQLAlchemyError as e:
            logger.error("Failed to load profile %s: %s", profile_id, e)
            raise StoreUnavailable("get_profile") from e
        row = result.scalar()
        return UserProfile.from_model(row) if row else None

    async def list_visible_profiles(
        self, profile_filter: ProfileFilter | None = None
    ) -> list[UserProfile]:
        """List visible profiles that have reported a position."""
        query = (
            select(Profile)
            .where(Profile.is_visible.is_(True))
            .where(Profile.latitude.isnot(None))
            .where(Profile.longitude.isnot(None))
        )
        if profile_filter is not None:
            if profile_filter.min_latitude is not None:
                query = query.where(Profile.latitude >= profile_filter.min_latitude)
            if profile_filter.max_latitude is not None:
                query = query.where(Profile.latitude <= profile_filter.max_latitude)

        try:
            result = await self._db.execute(query.order_by(Profile.id))
        except SQLAlchemyError as e:
            logger.error("Failed to list visible profiles: %s", e)
            raise StoreUnavailable("list_visible_profiles") from e
        return [UserProfile.from_model(row) for row in result.scalars().all()]

    async def update_profile_fields(self, profile_id: str, fields: dict[str, Any]) -> None:
        """Write the given fields in a single UPDATE statement.

        ``exact_location`` (Coordinates or None) maps onto the latitude and
        longitude columns together, so a pair is never half-written.
        """
        values: dict[str, Any] = {}
        for name, value in fields.items():
            if name == "exact_location":
                values["latitude"] = value.latitude if value is not None else None
                values["longitude"] = value.longitude if value is not None else None
            elif name in UPDATABLE_FIELDS:
                values[name] = value
            else:
                raise ValueError(f"Field not updatable: {name}")
        values["updated_at"] = utc_now()

        if not _is_uuid(profile_id):
            raise NotFound(profile_id)
        try:
            result = await self._db.execute(
                update(Profile).where(Profile.id == profile_id).values(**values)
            )
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise Conflict("Username already taken") from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Failed to update profile %s: %s", profile_id, e)
            raise StoreUnavailable("update_profile_fields") from e

        if result.rowcount == 0:
            raise NotFound(profile_id)

    async def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile row."""
        row = Profile(
            id=profile.id,
            username=profile.username,
            van_name=profile.van_name,
            van_photo_url=profile.van_photo_url,
            city=profile.city,
            main_specialty=profile.main_specialty,
            skills=[str(skill) for skill in profile.skills],
            days_on_road=profile.days_on_road,
            connections_count=profile.connections_count,
            is_visible=profile.is_visible,
        )
        self._db.add(row)
        try:
            await self._db.commit()
            await self._db.refresh(row)
        except IntegrityError as e:
            await self._db.rollback()
            raise Conflict("Profile or username already exists") from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Failed to create profile %s: %s", profile.id, e)
            raise StoreUnavailable("create_profile") from e
        return UserProfile.from_model(row)

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile; True when a row was removed."""
        if not _is_uuid(profile_id):
            return False
        try:
            result = await self._db.execute(delete(Profile).where(Profile.id == profile_id))
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Failed to delete profile %s: %s", profile_id, e)
            raise StoreUnavailable("delete_profile") from e
        return result.rowcount > 0

    async def username_taken(self, username: str, exclude_id: str | None = None) -> bool:
        """Check whether another profile already uses this username."""
        query = select(func.count()).select_from(Profile).where(Profile.username == username)
        if exclude_id is not None:
            query = query.where(Profile.id != exclude_id)
        try:
            count = await self._db.scalar(query)
        except SQLAlchemyError as e:
            logger.error("Failed to check username: %s", e)
            raise StoreUnavailable("username_taken") from e
        return bool(count)


async def get_profile_store(db: AsyncSession = Depends(get_db)) -> DatabaseProfileStore:
    """Dependency that provides the profile store for a request."""
    return DatabaseProfileStore(db)
