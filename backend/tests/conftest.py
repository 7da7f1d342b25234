"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

from api.dependencies import reset_container
from modules.auth.tokens import SessionTokenIssuer
from modules.identity.interfaces import IIdentityProvider
from modules.identity.models import ProviderIdentity, ProviderSession
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import UserProfile


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def make_profile(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    username: str = "testuser",
    is_verified: bool = True,
    **overrides,
) -> UserProfile:
    """Build a stored profile with sensible defaults."""
    return UserProfile(
        id=user_id,
        email=email,
        username=username,
        is_verified=is_verified,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        **overrides,
    )


def make_identity(
    user_id: str = "test-user-123",
    email: Optional[str] = "test@example.com",
    provider: str = "email",
    **user_metadata,
) -> ProviderIdentity:
    """Build a provider identity as the provider client would return it."""
    return ProviderIdentity(
        id=user_id,
        email=email,
        user_metadata=user_metadata,
        app_metadata={"provider": provider},
    )


def make_session(identity: ProviderIdentity) -> ProviderSession:
    return ProviderSession(identity=identity, access_token="provider-access-token")


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def token_issuer() -> SessionTokenIssuer:
    return SessionTokenIssuer(TEST_JWT_SECRET, expires_in=3600, audience="photogram")


@pytest.fixture
def mock_provider() -> AsyncMock:
    """Identity provider double; every method is awaitable."""
    return AsyncMock(spec=IIdentityProvider)


@pytest.fixture
def mock_store() -> MagicMock:
    """
    Profile store double with no profiles.

    Lookups return None until a test configures them.
    """
    store = MagicMock(spec=IProfileStore)
    store.get_by_id.return_value = None
    store.get_by_email.return_value = None
    store.get_by_username.return_value = None
    return store


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(token_issuer: SessionTokenIssuer, test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return token_issuer.issue(test_user_id, test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
