"""Profile service — read and edit the mutable fields of a user record."""

import logging
from urllib.parse import urlparse

from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import Membership, User, placeholder_avatar
from port.user_repository import UserRepository
from utils.settings import Settings

logger = logging.getLogger(__name__)


def parse_membership(value: str | Membership | None) -> Membership | None:
    """Map a client-supplied tier name to Membership; None passes through."""
    if value is None or isinstance(value, Membership):
        return value
    try:
        return Membership(value)
    except ValueError:
        allowed = ", ".join(m.value for m in Membership)
        raise ValidationError(f"Membership must be one of: {allowed}")


def get_profile(repo: UserRepository, user_id: str) -> User:
    """Return the caller's user record.

    Raises:
        NotFoundError: the ID no longer resolves (token outlived the account)
    """
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_profile(
    repo: UserRepository,
    settings: Settings,
    user_id: str,
    name: str | None,
    email: str | None,
    membership: str | Membership | None = None,
) -> User:
    """Overwrite name and email, and membership when given.

    The avatar follows the name while it is still the generated placeholder;
    an avatar set explicitly through set_avatar is left alone.

    Raises:
        ValidationError: name or email empty, or unknown membership
        DuplicateEmailError: email belongs to another user
        NotFoundError: caller no longer exists
    """
    if not name or not name.strip() or not email or not email.strip():
        raise ValidationError("Name and email are required")
    tier = parse_membership(membership)
    name = name.strip()
    email = email.strip()

    current = get_profile(repo, user_id)
    avatar = None
    old_placeholder = placeholder_avatar(current.name, settings.avatar_base_url, settings.avatar_background)
    if current.avatar == old_placeholder and name != current.name:
        avatar = placeholder_avatar(name, settings.avatar_base_url, settings.avatar_background)

    user = repo.update(user_id, name=name, email=email, membership=tier, avatar=avatar)
    if user is None:
        raise NotFoundError("User not found")

    logger.info("Profile updated", extra={"userId": user_id})
    return user


def set_avatar(repo: UserRepository, user_id: str, avatar_url: str | None) -> User:
    """Replace the avatar with a caller-supplied http(s) URL.

    Raises:
        ValidationError: empty or non-http(s) URL
        NotFoundError: caller no longer exists
    """
    if not avatar_url or not avatar_url.strip():
        raise ValidationError("Avatar URL is required")
    avatar_url = avatar_url.strip()
    parsed = urlparse(avatar_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("Avatar URL must be an http(s) URL")

    user = repo.update(user_id, avatar=avatar_url)
    if user is None:
        raise NotFoundError("User not found")

    logger.info("Avatar updated", extra={"userId": user_id})
    return user
