"""
Profile repository for database access.

Encapsulates all Supabase queries and data mapping for the profile table.
Each public method is a single remote call; PostgREST and transport errors
are translated into profile module exceptions here so that no Supabase
exception type leaks into the services.
"""

import logging
import math
import re
from typing import Optional, Any, Callable, TypeVar

import httpx
from supabase import Client, PostgrestAPIError

from shared.repository import BaseRepository
from .models import NewProfile, ProfileListResponse, UserProfile
from .exceptions import DuplicateProfileError, ProfileStoreUnavailableError

logger = logging.getLogger(__name__)

R = TypeVar("R")

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"

# e.g. 'Key (username)=(alice) already exists.'
_DUPLICATE_KEY_RE = re.compile(r"Key \((?P<field>\w+)\)=\((?P<value>.*)\)")

# Characters with meaning inside a PostgREST or() filter
_FILTER_UNSAFE_RE = re.compile(r"[,()*%]")


class ProfileRepository(BaseRepository[UserProfile]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks or
    business-rule validation. The services decide what may be written.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db)
        self._table = table

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Get a profile by its provider-issued id."""
        return self._get_one("id", user_id)

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        """Get a profile by email."""
        return self._get_one("email", email)

    def get_by_username(self, username: str) -> Optional[UserProfile]:
        """Get a profile by username."""
        return self._get_one("username", username)

    def list_profiles(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> ProfileListResponse:
        """
        List profiles, most recent first.

        Args:
            page: Page number (1-indexed).
            limit: Items per page.
            search: Optional case-insensitive match on username or bio.

        Returns:
            Paginated list response.
        """
        offset = (page - 1) * limit

        def run():
            query = self._db.table(self._table).select("*", count="exact")
            if search:
                term = _FILTER_UNSAFE_RE.sub("", search)
                query = query.or_(f"username.ilike.%{term}%,bio.ilike.%{term}%")
            return query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()

        result = self._call("list profiles", run)
        total = result.count or 0

        return ProfileListResponse(
            users=[self._map_to_profile(row).to_projection() for row in result.data],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, profile: NewProfile) -> UserProfile:
        """
        Insert a new profile row.

        Raises:
            DuplicateProfileError: If email, username or id already exist.
        """
        data = profile.model_dump()
        result = self._call(
            "create profile",
            lambda: self._db.table(self._table).insert(data).execute(),
        )
        return self._map_to_profile(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserProfile]:
        """
        Apply a partial update to a profile.

        Returns:
            The updated profile, or None if no row has this id.
        """
        result = self._call(
            "update profile",
            lambda: self._db.table(self._table).update(data).eq("id", user_id).execute(),
        )
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _get_one(self, column: str, value: str) -> Optional[UserProfile]:
        result = self._call(
            f"get profile by {column}",
            lambda: self._db.table(self._table).select("*").eq(column, value).limit(1).execute(),
        )
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def _call(self, action: str, operation: Callable[[], R]) -> R:
        """Run one store operation, normalizing its failures."""
        try:
            return operation()
        except PostgrestAPIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise self._duplicate_error(e) from e
            logger.error("Profile store rejected %s: %s (%s)", action, e.message, e.code)
            raise ProfileStoreUnavailableError(
                f"Profile store failed to {action}",
                original_error=e.message,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Profile store unreachable during %s: %s", action, e)
            raise ProfileStoreUnavailableError(
                f"Profile store unreachable while trying to {action}",
                original_error=str(e),
            ) from e

    def _duplicate_error(self, error: PostgrestAPIError) -> DuplicateProfileError:
        match = _DUPLICATE_KEY_RE.search(error.details or "")
        if match:
            return DuplicateProfileError(match.group("field"), match.group("value"))
        message = error.message or ""
        for field in ("email", "username"):
            if field in message:
                return DuplicateProfileError(field)
        return DuplicateProfileError()

    def _map_to_profile(self, data: dict[str, Any]) -> UserProfile:
        """Map database row to UserProfile model."""
        return UserProfile(
            id=str(data["id"]),
            email=data["email"],
            username=data["username"],
            bio=data.get("bio"),
            profile_image=data.get("profile_image"),
            is_verified=bool(data.get("is_verified", False)),
            social_provider=data.get("social_provider"),
            social_id=data.get("social_id"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
