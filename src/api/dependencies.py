from fastapi import Depends, HTTPException

from adapter.external.qrcode_encoder import QrcodeEncoder
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from port.qr_encoder import QrEncoder
from port.user_repository import UserRepository
from utils.settings import Settings, get_settings


def get_optional_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository | None:
    """User repository, or None when MongoDB is unreachable."""
    client = get_mongodb_client(settings)
    if client is None:
        return None
    return MongoUserRepository(client[settings.mongodb_database])


def get_user_repo(repo: UserRepository | None = Depends(get_optional_user_repo)) -> UserRepository:
    """User repository, raising 503 if MongoDB is unavailable."""
    if repo is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return repo


def get_qr_encoder(settings: Settings = Depends(get_settings)) -> QrEncoder:
    return QrcodeEncoder(
        error_correction=settings.qr_error_correction,
        box_size=settings.qr_box_size,
        border=settings.qr_border,
    )
