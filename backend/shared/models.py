"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Identity carried by a validated session token.

    This model is populated from the token claims and made available
    to route handlers via dependency injection. It is the only identity
    other modules need to authorize an action; the live profile is
    resolved separately from the profile store.
    """

    id: str = Field(..., description="User ID (provider-issued UUID)")
    email: str = Field(..., description="User's email address")
    issued_at: datetime = Field(..., description="Token issue time")
    expires_at: datetime = Field(..., description="Token expiry time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
