"""
Authentication module.

Reconciles identity provider accounts with profiles, issues and validates
session tokens, and exposes the /auth routes.

Public API:
- IAuthService: Interface for auth operations
- SessionTokenIssuer: Signs and validates session tokens
- AuthResult / MessageResponse / OAuthUrlResponse / OtpSentResponse
- Auth exceptions: InvalidTokenError, EmailNotVerifiedError, etc.
"""

from .interfaces import IAuthService
from .tokens import SessionTokenIssuer
from .models import (
    AuthResult,
    MessageResponse,
    OAuthUrlResponse,
    OtpSentResponse,
    SessionClaims,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    InvalidCredentialsError,
    EmailNotVerifiedError,
    AccountNotLinkedError,
    EmailAlreadyRegisteredError,
    UsernameTakenError,
    UnknownEmailError,
    AlreadyVerifiedError,
    MissingEmailError,
    ProfileSyncError,
)

__all__ = [
    # Interface
    "IAuthService",
    "SessionTokenIssuer",
    # Models
    "AuthResult",
    "MessageResponse",
    "OAuthUrlResponse",
    "OtpSentResponse",
    "SessionClaims",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "EmailNotVerifiedError",
    "AccountNotLinkedError",
    "EmailAlreadyRegisteredError",
    "UsernameTakenError",
    "UnknownEmailError",
    "AlreadyVerifiedError",
    "MissingEmailError",
    "ProfileSyncError",
]
