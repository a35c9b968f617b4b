"""In-memory implementation of QrEncoder for testing."""

import hashlib

from domain.model.qr import QrFormat


class FakeQrEncoder:
    """Returns a digest of the input instead of a real image; can be told to fail."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, QrFormat]] = []

    def encode(self, data: str, fmt: QrFormat = QrFormat.PNG) -> bytes:
        self.calls.append((data, fmt))
        if self.error is not None:
            raise self.error
        return f"{fmt.value}:".encode() + hashlib.sha256(data.encode('utf-8')).digest()
