"""qrcode adapter — implements QrEncoder using the `qrcode` library.

PNG output goes through Pillow; SVG output uses the library's path-based
SVG factory so the result is a single <path> element.
"""

import io
import logging

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage

from domain.model.qr import QrFormat

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    'L': ERROR_CORRECT_L,
    'M': ERROR_CORRECT_M,
    'Q': ERROR_CORRECT_Q,
    'H': ERROR_CORRECT_H,
}


class QrcodeEncoder:
    """Adapter that implements QrEncoder with python-qrcode."""

    def __init__(self, error_correction: str = 'M', box_size: int = 10, border: int = 4):
        if error_correction not in ERROR_CORRECTION_LEVELS:
            raise ValueError(
                f"Unknown error correction level {error_correction!r}, "
                f"expected one of {sorted(ERROR_CORRECTION_LEVELS)}"
            )
        self.error_correction = ERROR_CORRECTION_LEVELS[error_correction]
        self.box_size = box_size
        self.border = border

    def encode(self, data: str, fmt: QrFormat = QrFormat.PNG) -> bytes:
        """Render data as a QR symbol.

        Args:
            data: Text to encode (UTF-8).
            fmt: Output format.

        Returns:
            PNG bytes or SVG document bytes.

        Raises:
            qrcode.exceptions.DataOverflowError: data does not fit in a QR symbol.
        """
        factory = PilImage if fmt is QrFormat.PNG else SvgPathImage
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            box_size=self.box_size,
            border=self.border,
            image_factory=factory,
        )
        qr.add_data(data)
        qr.make(fit=True)

        buffer = io.BytesIO()
        image = qr.make_image()
        if fmt is QrFormat.PNG:
            image.save(buffer, format='PNG')
        else:
            image.save(buffer)

        logger.debug("QR encoded", extra={"format": fmt.value, "version": qr.version})
        return buffer.getvalue()
