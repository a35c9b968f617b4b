"""Application settings read once from the environment.

Every tunable value (signing secret, token lifetime, public base URL, QR
rendering options, storage location) lives here so that routes and services
receive one injected object instead of reading os.environ themselves.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 7 * 24 * 60
    bcrypt_rounds: int = 12

    # Externally visible frontend URL, used for profileUrl in QR payloads
    client_url: str = "http://localhost:3000"
    avatar_base_url: str = "https://ui-avatars.com/api/"
    avatar_background: str = "007bff"

    qr_error_correction: str = "M"
    qr_box_size: int = 10
    qr_border: int = 4

    mongo_url: str | None = None
    mongodb_database: str = "profile_qr"

    cors_origins: str = "*"
    enable_debug_routes: bool = False
    log_level: str = "INFO"
    port: int = 5000


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Raises:
        ValueError: JWT_SECRET_KEY is missing, or a numeric variable is malformed
    """
    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return Settings(
        jwt_secret_key=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expiration_minutes=_env_int("JWT_EXPIRATION_MINUTES", 7 * 24 * 60),
        bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 12),
        client_url=os.getenv("CLIENT_URL", "http://localhost:3000").rstrip("/"),
        avatar_base_url=os.getenv("AVATAR_BASE_URL", "https://ui-avatars.com/api/"),
        avatar_background=os.getenv("AVATAR_BACKGROUND", "007bff"),
        qr_error_correction=os.getenv("QR_ERROR_CORRECTION", "M").upper(),
        qr_box_size=_env_int("QR_BOX_SIZE", 10),
        qr_border=_env_int("QR_BORDER", 4),
        mongo_url=os.getenv("MONGO_URL"),
        mongodb_database=os.getenv("MONGODB_DATABASE", "profile_qr"),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        enable_debug_routes=_env_bool("ENABLE_DEBUG_ROUTES"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=_env_int("PORT", 5000),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings, loading them on first use."""
    return load_settings()
