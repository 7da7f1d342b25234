"""Tests for identity provider models."""

from modules.identity.models import OAuthProvider, ProviderIdentity, SocialMetadata


class TestOAuthProvider:
    def test_values(self):
        assert OAuthProvider("google") is OAuthProvider.GOOGLE
        assert {p.value for p in OAuthProvider} == {"google", "facebook", "github"}

    def test_display_name(self):
        assert OAuthProvider.GITHUB.display_name == "GitHub"


class TestSocialMetadata:
    def test_username_preferred_over_name(self):
        metadata = SocialMetadata(username="alice", name="Alice Smith")
        assert metadata.preferred_username() == "alice"

    def test_name_used_when_username_missing(self):
        metadata = SocialMetadata(name="Alice Smith")
        assert metadata.preferred_username() == "Alice Smith"

    def test_blank_values_are_missing(self):
        metadata = SocialMetadata(username="   ", name="")
        assert metadata.preferred_username() is None

    def test_profile_image_sources(self):
        assert SocialMetadata(picture="p.png").profile_image() == "p.png"
        assert SocialMetadata(avatar_url="a.png", picture="p.png").profile_image() == "a.png"
        assert SocialMetadata().profile_image() == ""

    def test_external_id(self):
        assert SocialMetadata(provider_id=12345).external_id() == "12345"
        assert SocialMetadata(sub="abc").external_id() == "abc"
        assert SocialMetadata().external_id() is None

    def test_unknown_keys_ignored(self):
        metadata = SocialMetadata.model_validate({"email_verified": True, "iss": "https://x"})
        assert metadata.preferred_username() is None


class TestProviderIdentity:
    def test_social_metadata_from_user_metadata(self):
        identity = ProviderIdentity(
            id="user-123",
            email="alice@example.com",
            user_metadata={"username": "alice", "bio": "Photographer"},
            app_metadata={"provider": "github"},
        )

        assert identity.social_metadata.preferred_username() == "alice"
        assert identity.social_metadata.bio == "Photographer"
        assert identity.auth_provider == "github"

    def test_auth_provider_missing(self):
        identity = ProviderIdentity(id="user-123")
        assert identity.auth_provider is None
        assert identity.email is None
