"""QR export service — builds profile payloads and renders them as QR codes."""

import base64
import logging
from datetime import datetime, timezone

from domain.model.errors import EncodeError, NotFoundError
from domain.model.qr import PublicQrPayload, QrFormat, QrPayload, SelfQrPayload
from domain.model.user import User
from port.qr_encoder import QrEncoder
from port.user_repository import UserRepository
from utils.settings import Settings

logger = logging.getLogger(__name__)


def build_public_payload(user: User) -> PublicQrPayload:
    return PublicQrPayload(
        name=user.name,
        email=user.email,
        membership=user.membership.value,
    )


def build_self_payload(user: User, settings: Settings, now: datetime | None = None) -> SelfQrPayload:
    return SelfQrPayload(
        user_id=user.id,
        name=user.name,
        email=user.email,
        membership=user.membership.value,
        profile_url=f"{settings.client_url}/user/{user.id}",
        generated_at=now or datetime.now(timezone.utc),
    )


def encode(encoder: QrEncoder, payload: QrPayload, fmt: QrFormat = QrFormat.PNG) -> str:
    """Render a payload as a base64 data URL.

    The same payload and format always yield the same URL.

    Raises:
        EncodeError: the encoder failed (e.g. payload too large for a QR symbol)
    """
    try:
        image = encoder.encode(payload.serialize(), fmt)
    except Exception as e:
        logger.error("QR encoding failed", extra={"format": fmt.value, "error": str(e)})
        raise EncodeError("Error generating QR code") from e

    return f"data:{fmt.mime_type};base64,{base64.b64encode(image).decode('ascii')}"


def lookup_by_user_id(repo: UserRepository, user_id: str) -> tuple[PublicQrPayload, str]:
    """Public payload and avatar for any user ID.

    Raises:
        NotFoundError: no such user
    """
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return build_public_payload(user), user.avatar


def generate_for_user(
    repo: UserRepository,
    encoder: QrEncoder,
    settings: Settings,
    user_id: str,
    fmt: QrFormat = QrFormat.PNG,
) -> tuple[str, SelfQrPayload]:
    """Render the authenticated caller's own QR code.

    Raises:
        NotFoundError: caller no longer exists
        EncodeError: rendering failed
    """
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")

    payload = build_self_payload(user, settings)
    qr_code = encode(encoder, payload, fmt)
    logger.info("QR code generated", extra={"userId": user_id, "format": fmt.value})
    return qr_code, payload
