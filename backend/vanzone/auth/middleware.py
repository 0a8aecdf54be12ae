"""Identity resolution for request handlers."""

from typing import Protocol

from fastapi import Depends, HTTPException, Request, status


class IdentityProvider(Protocol):
    """Answers who the caller is; None when nobody is signed in."""

    def current_user_id(self) -> str | None: ...


class SessionIdentity:
    """Identity taken from the signed session cookie.

    The session is issued by the external authentication service, which
    stores the signed-in user's id under ``user_id``.
    """

    def __init__(self, session: dict):
        self._session = session

    def current_user_id(self) -> str | None:
        user_id = self._session.get("user_id")
        return str(user_id) if user_id else None


class StaticIdentity:
    """Identity fixed at construction, for jobs and scripts acting as one user."""

    def __init__(self, user_id: str | None):
        self._user_id = user_id

    def current_user_id(self) -> str | None:
        return self._user_id


async def get_identity(request: Request) -> IdentityProvider:
    """Dependency that provides the caller's identity."""
    return SessionIdentity(request.session)


async def require_user_id(
    identity: IdentityProvider = Depends(get_identity),
) -> str:
    """Get the caller's user id, or raise 401 if not authenticated."""
    user_id = identity.current_user_id()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id
