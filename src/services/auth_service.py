"""Auth service — registration, login and bearer token business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import bcrypt
from jose import JWTError, jwt

from domain.model.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    ValidationError,
)
from domain.model.user import Membership, User, placeholder_avatar
from port.user_repository import UserRepository
from utils.settings import Settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    """Hash checked when the email is unknown, so both login failures cost the same."""
    return bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=rounds)).decode("utf-8")


@dataclass(frozen=True)
class AuthResult:
    """Token plus the user it was issued for."""
    token: str
    user: User


def _hash_password(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash, or password longer than bcrypt accepts
        return False


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


# ── tokens ───────────────────────────────────────────────


def create_access_token(settings: Settings, user_id: str) -> str:
    """Create a signed JWT carrying the user ID and an expiry."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def authenticate(settings: Settings, token: str | None) -> str:
    """Verify a bearer token and return the caller's user ID.

    Read-only: does not touch the user store.

    Raises:
        MissingTokenError: no token presented
        InvalidTokenError: malformed, expired, wrongly signed, or no subject
    """
    if not token:
        raise MissingTokenError()

    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        raise InvalidTokenError()

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise InvalidTokenError()
    return user_id


# ── account operations ───────────────────────────────────


def register(
    repo: UserRepository,
    settings: Settings,
    name: str,
    email: str,
    password: str,
    membership: Membership = Membership.BASIC,
) -> AuthResult:
    """Register a new user and issue a token.

    Raises:
        ValidationError: name, email or password is empty
        DuplicateEmailError: email already registered (raised by the store)
    """
    _require(name=name, email=email, password=password)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    name = name.strip()
    email = email.strip()

    user = repo.create(
        name=name,
        email=email,
        password_hash=_hash_password(password, settings.bcrypt_rounds),
        avatar=placeholder_avatar(name, settings.avatar_base_url, settings.avatar_background),
        membership=membership,
    )

    logger.info("User registered", extra={"userId": user.id, "email": user.email})
    return AuthResult(token=create_access_token(settings, user.id), user=user)


def login(repo: UserRepository, settings: Settings, email: str, password: str) -> AuthResult:
    """Authenticate by email and password and issue a fresh token.

    Unknown email and wrong password are indistinguishable to the caller.

    Raises:
        ValidationError: email or password is empty
        InvalidCredentialsError: no such email, or password mismatch
    """
    if not email or not email.strip() or not password:
        raise ValidationError("Email and password are required")

    user = repo.get_by_email(email.strip())
    if user is None or not user.password_hash:
        _verify_password(password, _dummy_hash(settings.bcrypt_rounds))
        raise InvalidCredentialsError()
    if not _verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    # Login succeeds even if the timestamp write fails
    if repo.update_last_login(user.id):
        user.last_login = datetime.now(timezone.utc)

    logger.info("User logged in", extra={"userId": user.id})
    return AuthResult(token=create_access_token(settings, user.id), user=user)
