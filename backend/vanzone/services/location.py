"""Owner location updates and invalidation of dependent views."""

import logging
from collections.abc import Awaitable, Callable

from vanzone.auth.middleware import IdentityProvider
from vanzone.database import utc_now
from vanzone.exceptions import NotAuthorized, NotFound
from vanzone.schemas.location import Coordinates
from vanzone.services.geo import to_zone_center, validate_coordinates
from vanzone.services.store import ProfileStore

logger = logging.getLogger(__name__)

InvalidationListener = Callable[[str], Awaitable[None]]


class LocationInvalidation:
    """Notifies read paths that cache zone or nearby results of profile changes."""

    def __init__(self) -> None:
        self._listeners: list[InvalidationListener] = []

    def subscribe(self, listener: InvalidationListener) -> None:
        """Register a coroutine called with the id of each changed profile."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: InvalidationListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def notify(self, profile_id: str) -> None:
        """Call every listener.

        Runs after the change is committed, so a failing listener is logged
        and never undoes or fails the change itself.
        """
        for listener in list(self._listeners):
            try:
                await listener(profile_id)
            except Exception:
                logger.exception("Invalidation listener failed for profile %s", profile_id)


location_invalidation = LocationInvalidation()


async def update_location(
    store: ProfileStore,
    identity: IdentityProvider,
    profile_id: str,
    coordinates: Coordinates,
    city: str | None = None,
    invalidation: LocationInvalidation | None = None,
) -> bool:
    """Replace a profile's exact position on behalf of its owner.

    Nothing is written unless the caller owns the profile and the coordinates
    are valid. Ownership is checked first, so a non-owner always gets
    NotAuthorized whatever they send. Position, city and timestamp are
    persisted in one write. Returns whether the exact position changed.
    """
    caller_id = identity.current_user_id()
    if caller_id is None or caller_id != profile_id:
        raise NotAuthorized("Only the owner may update a profile's location")

    validate_coordinates(coordinates)

    profile = await store.get_profile(profile_id)
    if profile is None:
        raise NotFound(profile_id)

    changed = profile.exact_location != coordinates
    new_city = city if city is not None else profile.city

    await store.update_profile_fields(
        profile_id,
        {
            "exact_location": coordinates,
            "city": new_city,
            "last_location_update": utc_now(),
        },
    )
    logger.info(
        "Location updated for profile %s (zone %s, changed=%s)",
        profile_id,
        to_zone_center(coordinates),
        changed,
    )

    if invalidation is not None and (changed or new_city != profile.city):
        await invalidation.notify(profile_id)
    return changed


def get_location_invalidation() -> LocationInvalidation:
    """Dependency that provides the process-wide invalidation registry."""
    return location_invalidation
