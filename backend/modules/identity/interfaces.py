"""
Identity provider interface.

The auth module depends on IIdentityProvider, not on the Supabase client,
so the provider can be swapped or mocked.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from .models import OAuthProvider, OAuthStart, ProviderIdentity, ProviderSession


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Remote authentication backend.

    Each method is a single remote operation. Refusals raise
    ProviderRejectedError; outages raise ProviderUnavailableError.
    No method retries, and no per-user state (sessions, PKCE verifiers)
    is kept between calls.
    """

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> ProviderIdentity:
        """Register a password account; the provider sends the confirmation email."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> ProviderSession:
        """Check email/password credentials."""
        ...

    async def verify_email_otp(self, email: str, token: str) -> ProviderSession:
        """Verify a six-digit code sent to an email address."""
        ...

    async def verify_sms_otp(self, phone: str, token: str) -> ProviderSession:
        """Verify a six-digit code sent by SMS."""
        ...

    async def resend_signup_verification(self, email: str) -> None:
        """Send the signup confirmation email again."""
        ...

    async def send_email_otp(self, email: str) -> None:
        """Send a one-time sign-in code by email."""
        ...

    async def send_sms_otp(self, phone: str) -> None:
        """Send a one-time sign-in code by SMS."""
        ...

    async def get_oauth_url(self, provider: OAuthProvider) -> OAuthStart:
        """Build the authorization URL and PKCE verifier for one social login."""
        ...

    async def exchange_code(self, code: str, code_verifier: str) -> ProviderSession:
        """Exchange an OAuth authorization code, proving the login with its verifier."""
        ...

    async def send_password_reset(self, email: str) -> None:
        """Send a password reset email."""
        ...

    async def update_password(self, user_id: str, new_password: str) -> ProviderIdentity:
        """Set a new password for a user."""
        ...
