"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    ValidationError,
)


# -----------------------------------------------------------------------------
# Session tokens
# -----------------------------------------------------------------------------


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(AuthenticationError):
    """Raised when a valid token's subject has no profile."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


# -----------------------------------------------------------------------------
# Credentials
# -----------------------------------------------------------------------------


class InvalidCredentialsError(AuthenticationError):
    """Raised when the identity provider refuses email/password credentials."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class EmailNotVerifiedError(AuthenticationError):
    """Raised on password sign-in to an account whose email is unverified."""

    def __init__(self, email: str):
        super().__init__(
            "Email verification required",
            code="EMAIL_NOT_VERIFIED",
            details={"email": email},
        )


class AccountNotLinkedError(AuthenticationError):
    """Raised when the provider accepts credentials but no profile exists for the email."""

    def __init__(self, email: str):
        super().__init__(
            "User profile not found",
            code="PROFILE_MISSING",
            details={"email": email},
        )


# -----------------------------------------------------------------------------
# Registration and verification
# -----------------------------------------------------------------------------


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has a profile."""

    def __init__(self, email: str):
        super().__init__(
            "Email is already registered",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


class UsernameTakenError(ConflictError):
    """Raised when signing up with a username that already has a profile."""

    def __init__(self, username: str):
        super().__init__(
            "Username is already taken",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class UnknownEmailError(ValidationError):
    """Raised when a verification flow names an email with no profile."""

    def __init__(self, email: str):
        super().__init__(
            "User not found",
            code="UNKNOWN_EMAIL",
            details={"email": email},
        )


class AlreadyVerifiedError(ValidationError):
    """Raised when verifying an email that is already verified."""

    def __init__(self, email: str):
        super().__init__(
            "Email is already verified",
            code="ALREADY_VERIFIED",
            details={"email": email},
        )


class MissingEmailError(ValidationError):
    """Raised when a social or SMS identity carries no email to reconcile on."""

    def __init__(self, source: str):
        super().__init__(
            f"The {source} account has no email address",
            code="MISSING_EMAIL",
            details={"source": source},
        )


class ProfileSyncError(ExternalServiceError):
    """
    Raised when the provider account exists but its profile could not be written.

    The provider account is left in place; the error is logged with its id.
    """

    def __init__(self, user_id: str, original_error: Optional[str] = None):
        details = {"user_id": user_id}
        if original_error:
            details["original_error"] = original_error
        super().__init__(
            "Account setup could not be completed",
            service="profile_store",
            code="PROFILE_SYNC_FAILED",
            details=details,
        )


class InvalidOAuthStateError(ValidationError):
    """Raised when a social login callback arrives without a valid state value."""

    def __init__(self, message: str = "Invalid or expired login state"):
        super().__init__(message, code="INVALID_OAUTH_STATE")
