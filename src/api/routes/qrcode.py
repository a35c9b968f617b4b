"""QR code routes.

Endpoints:
- POST /qrcode/generate: Caller's own code (authenticated, rich payload)
- GET /qrcode/user/{user_id}: Anyone's code (public, name/email/membership only)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_qr_encoder, get_user_repo
from api.models import PublicQrResponse, QrGenerateResponse
from api.security import get_current_user_id
from domain.model.errors import EncodeError, NotFoundError
from domain.model.qr import QrFormat
from port.qr_encoder import QrEncoder
from port.user_repository import UserRepository
from services import qr_service
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/qrcode", tags=["qrcode"])


@router.post("/generate", response_model=QrGenerateResponse)
def generate_qr(
    fmt: QrFormat = Query(QrFormat.PNG, alias="format"),
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
    encoder: QrEncoder = Depends(get_qr_encoder),
    settings: Settings = Depends(get_settings),
):
    """Generate a QR code for the authenticated caller."""
    try:
        qr_code, payload = qr_service.generate_for_user(repo, encoder, settings, user_id, fmt)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EncodeError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return QrGenerateResponse(qr_code=qr_code, user_data=payload.to_dict())


@router.get("/user/{user_id}", response_model=PublicQrResponse)
def get_user_qr(
    user_id: str,
    fmt: QrFormat = Query(QrFormat.PNG, alias="format"),
    repo: UserRepository = Depends(get_user_repo),
    encoder: QrEncoder = Depends(get_qr_encoder),
):
    """Public QR code for any user, without authentication."""
    try:
        payload, avatar = qr_service.lookup_by_user_id(repo, user_id)
        qr_code = qr_service.encode(encoder, payload, fmt)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EncodeError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return PublicQrResponse(qr_code=qr_code, user=payload.to_dict(), avatar=avatar)
