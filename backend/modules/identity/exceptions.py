"""
Identity provider exceptions.

The provider client raises only these; callers decide whether a
rejection means bad input or bad credentials.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, ValidationError


class ProviderRejectedError(ValidationError):
    """Raised when the identity provider refuses a request (4xx)."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        provider_code: Optional[str] = None,
    ):
        details = {}
        if status is not None:
            details["status"] = status
        if provider_code:
            details["provider_code"] = provider_code
        super().__init__(message, code="PROVIDER_REJECTED", details=details)
        self.status = status
        self.provider_code = provider_code


class ProviderUnavailableError(ExternalServiceError):
    """Raised when the identity provider is unreachable or fails internally."""

    def __init__(self, message: str, original_error: Optional[str] = None):
        super().__init__(
            message,
            service="identity_provider",
            code="PROVIDER_UNAVAILABLE",
            details={"original_error": original_error} if original_error else None,
        )
