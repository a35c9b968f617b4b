"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_optional_user_repo
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(repo: UserRepository | None = Depends(get_optional_user_repo)):
    """Health check with the number of registered users."""
    health_status = {
        "status": "OK",
        "usersCount": None,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
    }

    if repo is None:
        logger.warning("Health check: MongoDB client unavailable")
        health_status["status"] = "degraded"
    else:
        try:
            health_status["usersCount"] = repo.count()
        except Exception as e:
            logger.warning("Health check could not count users", extra={"error": str(e)[:200]})
            health_status["status"] = "degraded"

    if health_status["status"] != "OK":
        health_status["message"] = "User store unavailable"

    status_code = status.HTTP_200_OK if health_status["status"] == "OK" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=health_status, status_code=status_code)
