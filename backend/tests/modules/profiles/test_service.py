"""Tests for the profile service."""

import pytest
from unittest.mock import MagicMock

from modules.profiles.service import ProfileService
from modules.profiles.models import ProfileListResponse, ProfileUpdate
from modules.profiles.exceptions import DuplicateProfileError, ProfileNotFoundError
from tests.conftest import make_profile


class TestProfileService:
    @pytest.fixture
    def service(self, mock_store):
        return ProfileService(store=mock_store)

    @pytest.mark.asyncio
    async def test_get_profile(self, service, mock_store):
        mock_store.get_by_id.return_value = make_profile()

        profile = await service.get_profile("test-user-123")

        assert profile.username == "testuser"
        mock_store.get_by_id.assert_called_once_with("test-user-123")

    @pytest.mark.asyncio
    async def test_get_profile_not_found(self, service):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_profile("missing")
        assert exc_info.value.code == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_list_profiles_delegates_to_store(self, service, mock_store):
        listing = ProfileListResponse(users=[], total=0, page=1, limit=10, total_pages=0)
        mock_store.list_profiles.return_value = listing

        result = await service.list_profiles(page=1, limit=10, search="cat")

        assert result is listing
        mock_store.list_profiles.assert_called_once_with(page=1, limit=10, search="cat")

    @pytest.mark.asyncio
    async def test_update_profile_applies_supplied_fields_only(self, service, mock_store):
        mock_store.get_by_id.return_value = make_profile()
        mock_store.update.return_value = make_profile(bio="New bio")

        profile = await service.update_profile("test-user-123", ProfileUpdate(bio="New bio"))

        assert profile.bio == "New bio"
        mock_store.update.assert_called_once_with("test-user-123", {"bio": "New bio"})

    @pytest.mark.asyncio
    async def test_update_profile_without_changes_skips_store(self, service, mock_store):
        mock_store.get_by_id.return_value = make_profile()

        profile = await service.update_profile("test-user-123", ProfileUpdate())

        assert profile.username == "testuser"
        mock_store.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_profile_rejects_taken_username(self, service, mock_store):
        mock_store.get_by_id.return_value = make_profile()
        mock_store.get_by_username.return_value = make_profile(user_id="other", username="taken")

        with pytest.raises(DuplicateProfileError) as exc_info:
            await service.update_profile("test-user-123", ProfileUpdate(username="taken"))

        assert exc_info.value.field == "username"
        mock_store.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_profile_keeping_own_username(self, service, mock_store):
        mock_store.get_by_id.return_value = make_profile()
        mock_store.update.return_value = make_profile()

        await service.update_profile("test-user-123", ProfileUpdate(username="testuser", bio="x"))

        mock_store.get_by_username.assert_not_called()
        mock_store.update.assert_called_once()

    @pytest.mark.asyncio
    async def test_update_profile_row_vanished(self, service, mock_store):
        mock_store.get_by_id.return_value = make_profile()
        mock_store.update.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.update_profile("test-user-123", ProfileUpdate(bio="x"))
