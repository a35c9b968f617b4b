"""Bearer token dependencies for protected routes."""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from domain.model.errors import AuthError
from services import auth_service
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    """Resolve the caller's user ID from `Authorization: Bearer <token>`.

    Raises 401 when the token is missing, malformed, expired or forged.
    Whether the user still exists is left to the handler (404).
    """
    token = credentials.credentials if credentials else None
    try:
        return auth_service.authenticate(settings, token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
