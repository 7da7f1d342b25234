"""Tests for the profile repository."""

import pytest
import httpx
from unittest.mock import MagicMock
from supabase import PostgrestAPIError

from modules.profiles.repository import ProfileRepository
from modules.profiles.models import NewProfile, UserProfile
from modules.profiles.exceptions import (
    DuplicateProfileError,
    ProfileStoreUnavailableError,
)


def profile_row(**overrides):
    row = {
        "id": "user-123",
        "email": "alice@example.com",
        "username": "alice",
        "bio": "Hi",
        "profile_image": "",
        "is_verified": True,
        "social_provider": None,
        "social_id": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def unique_violation(field: str, value: str) -> PostgrestAPIError:
    return PostgrestAPIError({
        "message": f'duplicate key value violates unique constraint "users_{field}_key"',
        "code": "23505",
        "details": f"Key ({field})=({value}) already exists.",
        "hint": None,
    })


class TestProfileLookups:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_db):
        return ProfileRepository(mock_db)

    def _lookup_chain(self, mock_db):
        return mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute

    def test_get_by_email_returns_profile(self, repository, mock_db):
        self._lookup_chain(mock_db).return_value.data = [profile_row()]

        profile = repository.get_by_email("alice@example.com")

        assert isinstance(profile, UserProfile)
        assert profile.username == "alice"
        assert profile.is_verified is True
        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.select.return_value.eq.assert_called_with(
            "email", "alice@example.com"
        )

    def test_get_by_username_returns_none_when_missing(self, repository, mock_db):
        self._lookup_chain(mock_db).return_value.data = []

        assert repository.get_by_username("nobody") is None
        mock_db.table.return_value.select.return_value.eq.assert_called_with("username", "nobody")

    def test_get_by_id_uses_configured_table(self, mock_db):
        repository = ProfileRepository(mock_db, table="profiles")
        self._lookup_chain(mock_db).return_value.data = [profile_row()]

        repository.get_by_id("user-123")

        mock_db.table.assert_called_with("profiles")

    def test_lookup_transport_error_is_unavailable(self, repository, mock_db):
        self._lookup_chain(mock_db).side_effect = httpx.ConnectError("boom")

        with pytest.raises(ProfileStoreUnavailableError) as exc_info:
            repository.get_by_email("alice@example.com")
        assert exc_info.value.service == "profile_store"


class TestProfileMutations:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_db):
        return ProfileRepository(mock_db)

    @pytest.fixture
    def new_profile(self):
        return NewProfile(
            id="user-123",
            email="alice@example.com",
            username="alice",
            is_verified=False,
        )

    def test_create_inserts_row(self, repository, mock_db, new_profile):
        insert = mock_db.table.return_value.insert
        insert.return_value.execute.return_value.data = [profile_row(is_verified=False)]

        profile = repository.create(new_profile)

        assert profile.id == "user-123"
        assert profile.is_verified is False
        inserted = insert.call_args.args[0]
        assert inserted["email"] == "alice@example.com"
        assert inserted["is_verified"] is False

    def test_create_duplicate_username(self, repository, mock_db, new_profile):
        mock_db.table.return_value.insert.return_value.execute.side_effect = (
            unique_violation("username", "alice")
        )

        with pytest.raises(DuplicateProfileError) as exc_info:
            repository.create(new_profile)

        assert exc_info.value.field == "username"
        assert exc_info.value.code == "USERNAME_TAKEN"
        assert exc_info.value.details["value"] == "alice"

    def test_create_duplicate_email(self, repository, mock_db, new_profile):
        mock_db.table.return_value.insert.return_value.execute.side_effect = (
            unique_violation("email", "alice@example.com")
        )

        with pytest.raises(DuplicateProfileError) as exc_info:
            repository.create(new_profile)

        assert exc_info.value.field == "email"
        assert exc_info.value.code == "EMAIL_TAKEN"

    def test_create_duplicate_without_details_uses_message(self, repository, mock_db, new_profile):
        mock_db.table.return_value.insert.return_value.execute.side_effect = PostgrestAPIError({
            "message": 'duplicate key value violates unique constraint "users_email_key"',
            "code": "23505",
            "details": None,
            "hint": None,
        })

        with pytest.raises(DuplicateProfileError) as exc_info:
            repository.create(new_profile)

        assert exc_info.value.field == "email"

    def test_create_other_store_error_is_unavailable(self, repository, mock_db, new_profile):
        mock_db.table.return_value.insert.return_value.execute.side_effect = PostgrestAPIError({
            "message": "permission denied for table users",
            "code": "42501",
            "details": None,
            "hint": None,
        })

        with pytest.raises(ProfileStoreUnavailableError) as exc_info:
            repository.create(new_profile)

        assert exc_info.value.code == "PROFILE_STORE_ERROR"
        assert "permission denied" in exc_info.value.details["original_error"]

    def test_update_returns_updated_profile(self, repository, mock_db):
        update = mock_db.table.return_value.update
        update.return_value.eq.return_value.execute.return_value.data = [
            profile_row(bio="New bio")
        ]

        profile = repository.update("user-123", {"bio": "New bio"})

        assert profile.bio == "New bio"
        update.assert_called_once_with({"bio": "New bio"})
        update.return_value.eq.assert_called_once_with("id", "user-123")

    def test_update_returns_none_when_no_row(self, repository, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []

        assert repository.update("missing", {"is_verified": True}) is None

class TestListProfiles:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_db):
        return ProfileRepository(mock_db)

    def test_list_paginates(self, repository, mock_db):
        select = mock_db.table.return_value.select
        ordered = select.return_value.order.return_value
        ordered.range.return_value.execute.return_value.data = [
            profile_row(id="u1", username="one", email="one@example.com"),
            profile_row(id="u2", username="two", email="two@example.com"),
        ]
        ordered.range.return_value.execute.return_value.count = 12

        result = repository.list_profiles(page=2, limit=5)

        select.assert_called_once_with("*", count="exact")
        select.return_value.order.assert_called_once_with("created_at", desc=True)
        ordered.range.assert_called_once_with(5, 9)
        assert [user.username for user in result.users] == ["one", "two"]
        assert result.total == 12
        assert result.total_pages == 3
        assert result.page == 2

    def test_list_with_search_filters_username_and_bio(self, repository, mock_db):
        filtered = mock_db.table.return_value.select.return_value.or_
        chain = filtered.return_value.order.return_value.range.return_value.execute.return_value
        chain.data = []
        chain.count = 0

        result = repository.list_profiles(search="al,i(ce)")

        filtered.assert_called_once_with("username.ilike.%alice%,bio.ilike.%alice%")
        assert result.users == []
        assert result.total_pages == 0
