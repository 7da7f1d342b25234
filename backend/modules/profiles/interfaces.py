"""
Profiles module interfaces.

IProfileStore is the contract of the profile table client; the auth engine
depends on it rather than on ProfileRepository so tests can substitute it.
IProfileService is what the /users routes depend on.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from .models import (
    NewProfile,
    ProfileListResponse,
    ProfileUpdate,
    UserProfile,
)


@runtime_checkable
class IProfileStore(Protocol):
    """
    Single-call operations over the remote profile table.

    Every method is one remote call. Unique-constraint violations raise
    DuplicateProfileError; any other store failure raises
    ProfileStoreUnavailableError.
    """

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Return the profile with this id, or None."""
        ...

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        """Return the profile with this email, or None."""
        ...

    def get_by_username(self, username: str) -> Optional[UserProfile]:
        """Return the profile with this username, or None."""
        ...

    def create(self, profile: NewProfile) -> UserProfile:
        """Insert a profile row and return it as stored."""
        ...

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserProfile]:
        """Apply a partial update; None if no row matched."""
        ...

    def list_profiles(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> ProfileListResponse:
        """List profiles, most recent first, optionally filtered."""
        ...


@runtime_checkable
class IProfileService(Protocol):
    """Profile reads and self-service updates."""

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Get a profile by id.

        Raises:
            ProfileNotFoundError: If no profile has this id
        """
        ...

    async def list_profiles(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> ProfileListResponse:
        """List profiles with pagination and optional search."""
        ...

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> UserProfile:
        """
        Update the caller's own profile.

        Raises:
            ProfileNotFoundError: If no profile has this id
            DuplicateProfileError: If the new username is held by another user
        """
        ...
