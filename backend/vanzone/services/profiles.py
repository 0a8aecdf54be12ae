"""Profile lifecycle: create, read, edit and delete on behalf of the owner."""

import logging

from vanzone.auth.middleware import IdentityProvider
from vanzone.exceptions import Conflict, NotAuthorized, NotFound
from vanzone.schemas.location import NearbyProfile
from vanzone.schemas.profile import ProfileCreate, ProfileUpdate, UserProfile
from vanzone.services.location import LocationInvalidation
from vanzone.services.store import ProfileStore
from vanzone.services.visibility import project_for_caller
from vanzone.skills import normalize_skills

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by sending null
_NON_NULLABLE = ("username", "skills", "days_on_road", "is_visible")


def _require_caller(identity: IdentityProvider) -> str:
    caller_id = identity.current_user_id()
    if caller_id is None:
        raise NotAuthorized("Not authenticated")
    return caller_id


async def create_profile(
    store: ProfileStore, identity: IdentityProvider, data: ProfileCreate
) -> UserProfile:
    """Create the caller's profile. Each identity owns at most one."""
    caller_id = _require_caller(identity)

    if await store.get_profile(caller_id) is not None:
        raise Conflict("Profile already exists")
    if await store.username_taken(data.username):
        raise Conflict("Username already taken")

    profile = UserProfile(id=caller_id, **data.model_dump())
    created = await store.create_profile(profile)
    logger.info("Created profile %s", caller_id)
    return created


async def get_my_profile(store: ProfileStore, identity: IdentityProvider) -> UserProfile:
    """Full profile of the caller, exact position included."""
    caller_id = _require_caller(identity)
    profile = await store.get_profile(caller_id)
    if profile is None:
        raise NotFound(caller_id)
    return profile


async def get_profile(
    store: ProfileStore, identity: IdentityProvider, profile_id: str
) -> UserProfile | NearbyProfile:
    """Look up one profile with the visibility rules applied."""
    profile = await store.get_profile(profile_id)
    return project_for_caller(profile, profile_id, identity.current_user_id())


async def update_profile(
    store: ProfileStore,
    identity: IdentityProvider,
    data: ProfileUpdate,
    invalidation: LocationInvalidation | None = None,
) -> UserProfile:
    """Edit attributes of the caller's own profile.

    The exact position is not editable here; it only changes through
    update_location.
    """
    caller_id = _require_caller(identity)
    current = await store.get_profile(caller_id)
    if current is None:
        raise NotFound(caller_id)

    fields = data.model_dump(exclude_unset=True)
    for name in _NON_NULLABLE:
        if name in fields and fields[name] is None:
            del fields[name]

    if "skills" in fields or "main_specialty" in fields:
        main_specialty = fields.get("main_specialty", current.main_specialty)
        skills = fields.get("skills", current.skills)
        fields["skills"] = [str(s) for s in normalize_skills(skills, main_specialty)]

    username = fields.get("username")
    if username is not None and username != current.username:
        if await store.username_taken(username, exclude_id=caller_id):
            raise Conflict("Username already taken")

    if fields:
        await store.update_profile_fields(caller_id, fields)
        logger.info("Updated profile %s fields=%s", caller_id, sorted(fields))
        if invalidation is not None:
            await invalidation.notify(caller_id)

    updated = await store.get_profile(caller_id)
    if updated is None:
        raise NotFound(caller_id)
    return updated


async def delete_profile(
    store: ProfileStore,
    identity: IdentityProvider,
    profile_id: str,
    invalidation: LocationInvalidation | None = None,
) -> None:
    """Delete a profile on behalf of its owner.

    Removal is immediate: subsequent zone and nearby queries no longer see it.
    """
    caller_id = identity.current_user_id()
    if caller_id is None or caller_id != profile_id:
        raise NotAuthorized("Only the owner may delete a profile")

    if not await store.delete_profile(profile_id):
        raise NotFound(profile_id)
    logger.info("Deleted profile %s", profile_id)

    if invalidation is not None:
        await invalidation.notify(profile_id)
