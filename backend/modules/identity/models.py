"""
Identity provider data models.

These are the provider's view of a user, decoupled from the Supabase SDK
types so the rest of the code never touches them.
"""

from enum import Enum
from typing import Any, ClassVar, Optional
from pydantic import BaseModel, Field, field_validator


class OAuthProvider(str, Enum):
    """Social login providers enabled on the identity provider."""

    GOOGLE = "google"
    FACEBOOK = "facebook"
    GITHUB = "github"

    @property
    def display_name(self) -> str:
        return {
            OAuthProvider.GOOGLE: "Google",
            OAuthProvider.FACEBOOK: "Facebook",
            OAuthProvider.GITHUB: "GitHub",
        }[self]


class SocialMetadata(BaseModel):
    """
    Sparse bag of profile hints supplied by a social provider.

    Every field is optional; providers fill in different subsets
    (Google sends name/picture, GitHub sends user_name/avatar_url, ...).
    Unknown keys are dropped.
    """

    model_config = {"extra": "ignore"}

    # Username candidates, consulted in this order
    USERNAME_SOURCES: ClassVar[tuple[str, ...]] = ("username", "name")
    # Avatar candidates, consulted in this order
    IMAGE_SOURCES: ClassVar[tuple[str, ...]] = ("avatar_url", "picture")

    username: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    picture: Optional[str] = None
    provider_id: Optional[str] = None
    sub: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def preferred_username(self) -> Optional[str]:
        """First non-empty username candidate, or None."""
        return self._first_of(self.USERNAME_SOURCES)

    def profile_image(self) -> str:
        return self._first_of(self.IMAGE_SOURCES) or ""

    def external_id(self) -> Optional[str]:
        """The user's id at the social provider, if reported."""
        return self.provider_id or self.sub

    def _first_of(self, fields: tuple[str, ...]) -> Optional[str]:
        for field in fields:
            value = getattr(self, field)
            if value:
                return value
        return None


class ProviderIdentity(BaseModel):
    """A user account as the identity provider reports it."""

    id: str = Field(..., description="Provider user ID (UUID)")
    email: Optional[str] = Field(None, description="Email, absent for some phone/social accounts")
    phone: Optional[str] = Field(None, description="Phone number for SMS accounts")
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def social_metadata(self) -> SocialMetadata:
        return SocialMetadata.model_validate(self.user_metadata)

    @property
    def auth_provider(self) -> Optional[str]:
        """Provider that authenticated this account ("email", "google", ...)."""
        return self.app_metadata.get("provider")


class ProviderSession(BaseModel):
    """Result of a provider call that authenticates a user."""

    identity: ProviderIdentity
    access_token: Optional[str] = Field(None, description="Provider access token, if a session was opened")


class OAuthStart(BaseModel):
    """
    A social login waiting for its callback.

    The code verifier is the PKCE secret for this login only; it must come
    back with the authorization code to complete the exchange.
    """

    url: str = Field(..., description="Authorization URL the user opens")
    code_verifier: str = Field(..., description="PKCE verifier matching the URL's code challenge")
