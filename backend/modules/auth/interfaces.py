"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
Downstream services (photos, comments, likes, follows) only ever need
validate_token() and get_current_user().
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from modules.identity.models import OAuthProvider
from modules.profiles.models import UserProfile

from .models import AuthResult, MessageResponse, OAuthUrlResponse, OtpSentResponse


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication and identity reconciliation.

    Every credential event ends with exactly one profile per email.
    Operations that open a session return an AuthResult with an access token.
    """

    async def sign_up(
        self,
        email: str,
        username: str,
        password: str,
        bio: Optional[str] = None,
    ) -> AuthResult:
        """
        Register a password account.

        The profile is created unverified and no token is issued.

        Raises:
            EmailAlreadyRegisteredError: If the email has a profile
            UsernameTakenError: If the username has a profile
            ProviderRejectedError: If the provider refuses the signup
            ProfileSyncError: If the profile could not be written after the
                provider accepted the signup
        """
        ...

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the provider refuses the credentials
            AccountNotLinkedError: If no profile exists for the email
            EmailNotVerifiedError: If the email is not verified yet
        """
        ...

    async def verify_email(self, email: str, token: str) -> AuthResult:
        """
        Confirm an email address with the code the provider sent.

        Raises:
            UnknownEmailError: If no profile exists for the email
            AlreadyVerifiedError: If the email is already verified
            ProviderRejectedError: If the code is wrong or expired
        """
        ...

    async def resend_verification(self, email: str) -> MessageResponse:
        """
        Send the verification email again.

        Raises:
            UnknownEmailError: If no profile exists for the email
            AlreadyVerifiedError: If the email is already verified
        """
        ...

    async def social_sign_in(self, provider: OAuthProvider) -> OAuthUrlResponse:
        """Build the URL that starts a social login, with the state that completes it."""
        ...

    async def social_callback(self, code: str, state: Optional[str]) -> AuthResult:
        """
        Finish a social login and open a session.

        Raises:
            InvalidOAuthStateError: If state is missing, expired or forged
            ProviderRejectedError: If the code exchange fails
            MissingEmailError: If the social account has no email
        """
        ...

    async def send_email_otp(self, email: str) -> OtpSentResponse:
        """Send a one-time sign-in code by email."""
        ...

    async def verify_email_otp(self, email: str, token: str) -> AuthResult:
        """Sign in with an emailed one-time code."""
        ...

    async def send_sms_otp(self, phone: str) -> OtpSentResponse:
        """Send a one-time sign-in code by SMS."""
        ...

    async def verify_sms_otp(self, phone: str, token: str) -> AuthResult:
        """
        Sign in with an SMS one-time code.

        Raises:
            MissingEmailError: If the phone account has no linked email
        """
        ...

    async def reset_password(self, email: str) -> MessageResponse:
        """Send a password reset email."""
        ...

    async def update_password(self, user_id: str, new_password: str) -> MessageResponse:
        """Set a new password for the authenticated user."""
        ...

    async def logout(self, user_id: str) -> MessageResponse:
        """
        Advisory sign-out.

        Always succeeds. Issued session tokens stay valid until they expire.
        """
        ...

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a session token and return the identity it carries.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def get_current_user(self, user_id: str) -> UserProfile:
        """
        Resolve a token subject to its live profile.

        Raises:
            UserNotFoundError: If the profile no longer exists
        """
        ...
