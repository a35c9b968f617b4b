"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from api.security import get_current_user_id
from domain.model.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from port.user_repository import UserRepository
from services import auth_service, profile_service
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    """Register a new user and return a token with the public user."""
    try:
        result = auth_service.register(
            repo, settings,
            name=request.name,
            email=request.email,
            password=request.password,
        )
    except (ValidationError, DuplicateEmailError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AuthResponse(token=result.token, user=UserResponse.from_domain(result.user))


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    """Login with email and password.

    Unknown email and wrong password return the same 400 response.
    """
    try:
        result = auth_service.login(repo, settings, email=request.email, password=request.password)
    except (ValidationError, InvalidCredentialsError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AuthResponse(token=result.token, user=UserResponse.from_domain(result.user))


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get current authenticated user info."""
    try:
        user = profile_service.get_profile(repo, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.from_domain(user)
