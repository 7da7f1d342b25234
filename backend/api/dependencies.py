"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Every service receives its collaborators explicitly; nothing reaches for
a global client on its own.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.tokens import SessionTokenIssuer
    from modules.identity.interfaces import IIdentityProvider
    from modules.profiles.interfaces import IProfileService, IProfileStore


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._token_issuer: "SessionTokenIssuer | None" = None
        self._identity_provider: "IIdentityProvider | None" = None
        self._profile_store: "IProfileStore | None" = None
        self._auth_service: "IAuthService | None" = None
        self._profile_service: "IProfileService | None" = None

    @property
    def token_issuer(self) -> "SessionTokenIssuer":
        """Get the session token issuer. Raises if JWT_SECRET is unset."""
        if self._token_issuer is None:
            from modules.auth.tokens import SessionTokenIssuer
            from shared.config import get_settings
            settings = get_settings()
            self._token_issuer = SessionTokenIssuer(
                secret=settings.jwt_secret,
                expires_in=settings.jwt_expires_in,
                audience=settings.jwt_audience,
            )
        return self._token_issuer

    @property
    def identity_provider(self) -> "IIdentityProvider":
        """Get the identity provider client."""
        if self._identity_provider is None:
            from modules.identity.client import SupabaseIdentityProvider
            from shared.config import get_settings
            from shared.database import get_supabase_auth_client_factory, get_supabase_client
            self._identity_provider = SupabaseIdentityProvider(
                auth_client_factory=get_supabase_auth_client_factory(),
                admin_client=get_supabase_client(),
                redirect_base_url=get_settings().frontend_url,
            )
        return self._identity_provider

    @property
    def profile_store(self) -> "IProfileStore":
        """Get the profile repository instance."""
        if self._profile_store is None:
            from modules.profiles.repository import ProfileRepository
            from shared.config import get_settings
            from shared.database import get_supabase_client
            self._profile_store = ProfileRepository(
                get_supabase_client(),
                table=get_settings().profiles_table,
            )
        return self._profile_store

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                provider=self.identity_provider,
                profiles=self.profile_store,
                tokens=self.token_issuer,
            )
        return self._auth_service

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService(store=self.profile_store)
        return self._profile_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._token_issuer = None
        self._identity_provider = None
        self._profile_store = None
        self._auth_service = None
        self._profile_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles
