"""
User-related endpoints.

Public profile reads and self-service profile updates.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from modules.profiles.interfaces import IProfileService
from modules.profiles.models import (
    ProfileListResponse,
    ProfileUpdate,
    UserProfile,
    UserProjection,
)
from ..dependencies import get_profile_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("", response_model=ProfileListResponse)
async def list_users(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=10, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(default=None, description="Match against username or bio"),
    service: IProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """
    List user profiles.

    Returns paginated results, newest accounts first.
    """
    return await service.list_profiles(page=page, limit=limit, search=search)


@router.patch("/me", response_model=UserProjection)
async def update_current_user(
    update: ProfileUpdate,
    user: UserProfile = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserProjection:
    """
    Update the current user's profile.

    Requires authentication. Only the supplied fields change.
    """
    profile = await service.update_profile(user.id, update)
    return profile.to_projection()


@router.get("/{user_id}", response_model=UserProjection)
async def get_user(
    user_id: str,
    service: IProfileService = Depends(get_profile_service),
) -> UserProjection:
    profile = await service.get_profile(user_id)
    return profile.to_projection()
