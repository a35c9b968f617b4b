"""FastAPI application entry point."""

import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Must run before settings are read
load_dotenv()

# main.py is at <root>/src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import auth, debug, endpoints, health, qrcode, users, views
from adapter.mongodb.connection import get_mongodb_client, reset_client
from adapter.mongodb.indexes import ensure_all_indexes
from utils.logging import setup_structured_logging
from utils.settings import get_settings

settings = get_settings()

setup_structured_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Version lives in pyproject.toml
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Profile QR API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    client = get_mongodb_client(settings)
    if client:
        # Raises when the unique email index is missing; the app must not start without it
        try:
            indexes_ok = ensure_all_indexes(client[settings.mongodb_database])
        except Exception:
            logger.critical("Unique email index could not be ensured, aborting startup", exc_info=True)
            reset_client()
            raise
        if indexes_ok:
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    logger.info("Service started", extra={
        "service": SERVICE_NAME,
        "version": VERSION,
        "port": settings.port,
        "debugRoutes": settings.enable_debug_routes,
    })

    yield

    reset_client()


app = FastAPI(
    title=SERVICE_NAME,
    description="User dashboard API - accounts, profiles and profile QR codes",
    version=VERSION,
    lifespan=lifespan,
)

# Browsers reject credentials with a wildcard origin
if settings.cors_origins == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are client errors (400), same as missing fields."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(qrcode.router)
api_router.include_router(health.router)
api_router.include_router(debug.router)
api_router.include_router(endpoints.router)


@api_router.get("", tags=["meta"])
async def root():
    """Service info."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


app.include_router(api_router)
app.include_router(views.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        access_log=False
    )
