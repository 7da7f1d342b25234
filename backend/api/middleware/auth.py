"""
Bearer token authentication dependencies.

Validates session tokens issued by the auth module and resolves the
token subject to its live profile.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService
from modules.auth.exceptions import MissingTokenError
from modules.profiles.models import UserProfile

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires a valid session token.

    Only checks the token; use get_current_user when the profile is needed.
    Authentication errors propagate to the API error handler (401).
    """
    if credentials is None:
        raise MissingTokenError("Missing authorization header")

    return await auth.validate_token(credentials.credentials)


async def get_current_user(
    token_user: AuthenticatedUser = Depends(get_token_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    Dependency that requires authentication and returns the live profile.

    Profile edits show up here without reissuing the token.

    Usage:
        @router.get("/protected")
        async def protected_route(user: UserProfile = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return await auth.get_current_user(token_user.id)
