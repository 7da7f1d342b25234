"""
Profiles module data models.

UserProfile mirrors a row of the profile table. UserProjection is the
public view returned by auth and profile endpoints.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """
    Full user profile as stored in the profile table.

    The id is issued by the identity provider and never changes.
    """

    id: str = Field(..., description="User ID (provider-issued UUID)")
    email: str = Field(..., description="Email address (reconciliation key)")
    username: str = Field(..., description="Unique username")
    bio: Optional[str] = Field(None, description="Profile bio")
    profile_image: Optional[str] = Field(None, description="Avatar URL")
    is_verified: bool = Field(default=False, description="Whether email is verified")
    social_provider: Optional[str] = Field(None, description="OAuth provider for social accounts")
    social_id: Optional[str] = Field(None, description="User ID at the OAuth provider")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    def to_projection(self) -> "UserProjection":
        """Build the public view of this profile."""
        return UserProjection(
            id=self.id,
            email=self.email,
            username=self.username,
            is_verified=self.is_verified,
            bio=self.bio,
            profile_image=self.profile_image,
        )


class UserProjection(BaseModel):
    """Public user view returned to API clients."""

    id: str
    email: str
    username: str
    is_verified: bool
    bio: Optional[str] = None
    profile_image: Optional[str] = None


class NewProfile(BaseModel):
    """Data required to create a profile row."""

    id: str
    email: str
    username: str
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    is_verified: bool = False
    social_provider: Optional[str] = None
    social_id: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Partial profile update. Unset fields are left untouched."""

    username: Optional[str] = Field(None, min_length=3, max_length=30)
    bio: Optional[str] = Field(None, max_length=500)
    profile_image: Optional[str] = None


class ProfileListResponse(BaseModel):
    """Paginated list of profiles."""

    users: list[UserProjection]
    total: int
    page: int
    limit: int
    total_pages: int
