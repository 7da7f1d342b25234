"""
Tests for shared models.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    @pytest.fixture
    def user(self):
        return AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            issued_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            expires_at=datetime(2024, 1, 8, tzinfo=timezone.utc),
        )

    def test_create_with_required_fields(self, user):
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.expires_at > user.issued_at

    def test_missing_fields_rejected(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="test@example.com")

    def test_immutable(self, user):
        """Should be immutable (frozen)."""
        with pytest.raises(ValidationError):
            user.email = "other@example.com"

    def test_ignores_extra_fields(self):
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            issued_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            expires_at=datetime(2024, 1, 8, tzinfo=timezone.utc),
            role="authenticated",
        )
        assert not hasattr(user, "role")
