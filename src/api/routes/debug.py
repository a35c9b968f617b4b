"""Development-only routes, mounted only when ENABLE_DEBUG_ROUTES is set.

Endpoints:
- GET /users: List every user (id, name, email, membership)
- POST /test/user: Create the sample account test@example.com / password123
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import UserListResponse, UserResponse, UserSummary
from domain.model.errors import DuplicateEmailError
from domain.model.user import Membership
from port.user_repository import UserRepository
from services import auth_service
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["debug"])

SAMPLE_USER = {
    "name": "Test User",
    "email": "test@example.com",
    "password": "password123",
}


def require_debug_routes(settings: Settings = Depends(get_settings)) -> None:
    if not settings.enable_debug_routes:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")


@router.get("/users", response_model=UserListResponse, dependencies=[Depends(require_debug_routes)])
def list_users(
    skip: int = 0,
    limit: int = 100,
    repo: UserRepository = Depends(get_user_repo),
):
    """List all users (testing only)."""
    users = repo.list_all(skip=max(skip, 0), limit=min(max(limit, 1), 1000))
    return UserListResponse(users=[
        UserSummary(id=u.id, name=u.name, email=u.email, membership=u.membership.value)
        for u in users
    ])


@router.post(
    "/test/user",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_debug_routes)],
)
def create_test_user(
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    """Create the sample Premium user (testing only)."""
    try:
        result = auth_service.register(repo, settings, membership=Membership.PREMIUM, **SAMPLE_USER)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Test user created", extra={"userId": result.user.id})
    return UserResponse.from_domain(result.user)
