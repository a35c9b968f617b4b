from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from urllib.parse import quote


class Membership(str, Enum):
    """Membership tiers a user can hold."""
    BASIC = 'Basic'
    PREMIUM = 'Premium'
    ENTERPRISE = 'Enterprise'


def placeholder_avatar(name: str, base_url: str, background: str) -> str:
    """Build the generated avatar URL for a display name."""
    return f"{base_url}?name={quote(name, safe='')}&background={background}"


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    name: str
    email: str
    avatar: str
    created_at: datetime
    updated_at: datetime
    membership: Membership = Membership.BASIC
    last_login: datetime | None = None
    password_hash: str | None = None
