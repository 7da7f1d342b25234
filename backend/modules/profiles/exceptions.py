"""
Profiles module exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, ExternalServiceError, NotFoundError


class ProfileNotFoundError(NotFoundError):
    """Raised when a profile lookup by id finds nothing."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class DuplicateProfileError(ConflictError):
    """Raised when the profile store rejects a row on a unique constraint."""

    def __init__(self, field: Optional[str] = None, value: Optional[str] = None):
        if field == "email":
            message = "Email is already registered"
            code = "EMAIL_TAKEN"
        elif field == "username":
            message = "Username is already taken"
            code = "USERNAME_TAKEN"
        else:
            message = "Profile already exists"
            code = "PROFILE_EXISTS"
        details = {}
        if field:
            details["field"] = field
        if value:
            details["value"] = value
        super().__init__(message, code=code, details=details)
        self.field = field


class ProfileStoreUnavailableError(ExternalServiceError):
    """Raised when the profile store is unreachable or returns an unknown error."""

    def __init__(self, message: str, original_error: Optional[str] = None):
        super().__init__(
            message,
            service="profile_store",
            code="PROFILE_STORE_ERROR",
            details={"original_error": original_error} if original_error else None,
        )
