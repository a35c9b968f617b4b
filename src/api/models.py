"""Pydantic models for API request/response.

Request fields are optional at the schema level so that empty or missing
values reach the services and come back as 400 ValidationError responses.
Wire names are camelCase where the frontend expects them.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.user import User


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── requests ─────────────────────────────────────────────


class RegisterRequest(_WireModel):
    """Request model for user registration."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(_WireModel):
    """Request model for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(_WireModel):
    """Request model for profile update. Omitted membership keeps the current tier."""
    name: Optional[str] = None
    email: Optional[str] = None
    membership: Optional[str] = None


class AvatarRequest(_WireModel):
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")


# ── responses ────────────────────────────────────────────


class UserResponse(_WireModel):
    """Public projection of a user. Never carries the password hash."""
    id: str
    name: str
    email: str
    avatar: str
    membership: str
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            membership=user.membership.value,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class AuthResponse(_WireModel):
    """Response model for authentication."""
    token: str
    user: UserResponse


class QrGenerateResponse(_WireModel):
    """The caller's own QR code plus the payload it encodes."""
    qr_code: str = Field(..., alias="qrCode", description="Data URL of the rendered code")
    user_data: dict = Field(..., alias="userData")


class PublicQrResponse(_WireModel):
    """QR code for another user, built from the public payload only."""
    qr_code: str = Field(..., alias="qrCode")
    user: dict
    avatar: str


class UserSummary(_WireModel):
    id: str
    name: str
    email: str
    membership: str


class UserListResponse(_WireModel):
    users: list[UserSummary]
