"""
Profiles module.

Owns the profile table: the local projection of each identity
(username, bio, avatar, verification flag, social linkage).

Public API:
- IProfileStore: Single-call profile table operations
- IProfileService: Profile reads and self-service updates
- UserProfile / UserProjection: Stored profile and its public view
- Profile exceptions: ProfileNotFoundError, DuplicateProfileError, etc.
"""

from .interfaces import IProfileStore, IProfileService
from .models import (
    UserProfile,
    UserProjection,
    NewProfile,
    ProfileUpdate,
    ProfileListResponse,
)
from .exceptions import (
    ProfileNotFoundError,
    DuplicateProfileError,
    ProfileStoreUnavailableError,
)

__all__ = [
    # Interfaces
    "IProfileStore",
    "IProfileService",
    # Models
    "UserProfile",
    "UserProjection",
    "NewProfile",
    "ProfileUpdate",
    "ProfileListResponse",
    # Exceptions
    "ProfileNotFoundError",
    "DuplicateProfileError",
    "ProfileStoreUnavailableError",
]
