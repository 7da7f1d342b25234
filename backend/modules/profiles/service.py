"""
Profile service implementation.

Profile reads and self-service updates on top of the profile store.
Identity creation is not done here; the auth module owns it.
"""

import logging
from typing import Optional

from .interfaces import IProfileService, IProfileStore
from .models import ProfileListResponse, ProfileUpdate, UserProfile
from .exceptions import DuplicateProfileError, ProfileNotFoundError

logger = logging.getLogger(__name__)


class ProfileService(IProfileService):
    """Profile service backed by an injected profile store."""

    def __init__(self, store: IProfileStore):
        self._store = store

    async def get_profile(self, user_id: str) -> UserProfile:
        profile = self._store.get_by_id(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def list_profiles(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> ProfileListResponse:
        return self._store.list_profiles(page=page, limit=limit, search=search)

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> UserProfile:
        """
        Update the caller's own profile.

        A username change is checked against the store first; the store's
        unique constraint still catches a concurrent claim of the same name.
        """
        profile = await self.get_profile(user_id)

        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return profile

        new_username = changes.get("username")
        if new_username and new_username != profile.username:
            holder = self._store.get_by_username(new_username)
            if holder is not None and holder.id != user_id:
                raise DuplicateProfileError("username", new_username)

        updated = self._store.update(user_id, changes)
        if updated is None:
            raise ProfileNotFoundError(user_id)

        logger.info("Updated profile %s (%s)", user_id, ", ".join(sorted(changes)))
        return updated
