"""Profile endpoints: lifecycle and owner location updates."""

from fastapi import APIRouter, Depends, status

from vanzone.auth.middleware import IdentityProvider, get_identity, require_user_id
from vanzone.schemas.location import Coordinates, NearbyProfile
from vanzone.schemas.profile import (
    LocationUpdate,
    LocationUpdateResult,
    ProfileCreate,
    ProfileUpdate,
    UserProfile,
)
from vanzone.services import profiles as profile_service
from vanzone.services.location import (
    LocationInvalidation,
    get_location_invalidation,
    update_location,
)
from vanzone.services.store import ProfileStore, get_profile_store

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=UserProfile,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_user_id)],
)
async def create_profile(
    data: ProfileCreate,
    store: ProfileStore = Depends(get_profile_store),
    identity: IdentityProvider = Depends(get_identity),
) -> UserProfile:
    """Create the caller's profile."""
    return await profile_service.create_profile(store, identity, data)


@router.get("/me", response_model=UserProfile, dependencies=[Depends(require_user_id)])
async def get_my_profile(
    store: ProfileStore = Depends(get_profile_store),
    identity: IdentityProvider = Depends(get_identity),
) -> UserProfile:
    """Get the caller's full profile, including the exact position."""
    return await profile_service.get_my_profile(store, identity)


@router.patch("/me", response_model=UserProfile, dependencies=[Depends(require_user_id)])
async def update_my_profile(
    data: ProfileUpdate,
    store: ProfileStore = Depends(get_profile_store),
    identity: IdentityProvider = Depends(get_identity),
    invalidation: LocationInvalidation = Depends(get_location_invalidation),
) -> UserProfile:
    """Edit attributes of the caller's profile."""
    return await profile_service.update_profile(store, identity, data, invalidation)


# Owner and public views have different shapes; serialize whichever is returned
@router.get("/{profile_id}", response_model=None)
async def get_profile(
    profile_id: str,
    store: ProfileStore = Depends(get_profile_store),
    identity: IdentityProvider = Depends(get_identity),
) -> UserProfile | NearbyProfile:
    """Get a profile: full for its owner, blurred for everyone else."""
    return await profile_service.get_profile(store, identity, profile_id)


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_user_id)],
)
async def delete_profile(
    profile_id: str,
    store: ProfileStore = Depends(get_profile_store),
    identity: IdentityProvider = Depends(get_identity),
    invalidation: LocationInvalidation = Depends(get_location_invalidation),
) -> None:
    """Delete the caller's own profile."""
    await profile_service.delete_profile(store, identity, profile_id, invalidation)


@router.put(
    "/{profile_id}/location",
    response_model=LocationUpdateResult,
    dependencies=[Depends(require_user_id)],
)
async def put_location(
    profile_id: str,
    data: LocationUpdate,
    store: ProfileStore = Depends(get_profile_store),
    identity: IdentityProvider = Depends(get_identity),
    invalidation: LocationInvalidation = Depends(get_location_invalidation),
) -> LocationUpdateResult:
    """Replace the exact position of the caller's own profile."""
    coordinates = Coordinates(latitude=data.latitude, longitude=data.longitude)
    changed = await update_location(
        store, identity, profile_id, coordinates, data.city, invalidation
    )
    return LocationUpdateResult(changed=changed)
