"""Profile routes for the authenticated caller.

Endpoints:
- GET /users/profile: Current user's public profile
- PUT /users/profile: Update name, email and membership
- POST /users/avatar: Replace the avatar URL
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import AvatarRequest, ProfileUpdateRequest, UserResponse
from api.security import get_current_user_id
from domain.model.errors import DuplicateEmailError, NotFoundError, ValidationError
from port.user_repository import UserRepository
from services import profile_service
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get the caller's profile."""
    try:
        user = profile_service.get_profile(repo, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.from_domain(user)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    request: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    """Update the caller's name, email and membership."""
    try:
        user = profile_service.update_profile(
            repo, settings, user_id,
            name=request.name,
            email=request.email,
            membership=request.membership,
        )
    except (ValidationError, DuplicateEmailError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.from_domain(user)


@router.post("/avatar", response_model=UserResponse)
def upload_avatar(
    request: AvatarRequest,
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Replace the caller's avatar with a URL."""
    try:
        user = profile_service.set_avatar(repo, user_id, request.avatar_url)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.from_domain(user)
