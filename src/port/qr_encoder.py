"""QR encoder port — outbound interface for rendering QR symbols."""

from typing import Protocol

from domain.model.qr import QrFormat


class QrEncoder(Protocol):
    """Port for turning text into an encoded QR image.

    Implementations must be deterministic: the same data and format always
    produce the same bytes.
    """

    def encode(self, data: str, fmt: QrFormat = QrFormat.PNG) -> bytes: ...
