from __future__ import annotations

import io

import qrcode
import qrcode.constants
from qrcode.image.pure import PyPNGImage
from qrcode.image.svg import SvgPathImage

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

TEL_SCHEME = "tel:"


def build_tel_uri(number: str) -> str:
    return f"{TEL_SCHEME}{number}"


def _build_qr(value: str, *, error_correction: str, border: int) -> qrcode.QRCode:
    level = _ERROR_CORRECTION.get(error_correction.upper())
    if level is None:
        raise ValueError(f"Unsupported error correction level: {error_correction}")
    qr = qrcode.QRCode(version=None, error_correction=level, box_size=10, border=border)
    qr.add_data(value)
    qr.make(fit=True)
    return qr


def render_qr_svg(value: str, *, size: int = 200, error_correction: str = "H", border: int = 0) -> str:
    """Render ``value`` as an inline SVG document sized ``size`` x ``size`` pixels."""
    qr = _build_qr(value, error_correction=error_correction, border=border)
    img = qr.make_image(image_factory=SvgPathImage)
    root = img.get_image()
    # viewBox keeps the module geometry; width/height pin the rendered size.
    root.set("width", str(size))
    root.set("height", str(size))
    return img.to_string(encoding="unicode")


def render_qr_png(value: str, *, size: int = 200, error_correction: str = "H", border: int = 0) -> bytes:
    """Render ``value`` as PNG bytes; the box size is the largest that fits in ``size``."""
    qr = _build_qr(value, error_correction=error_correction, border=border)
    qr.box_size = max(1, size // (qr.modules_count + 2 * border))
    img = qr.make_image(image_factory=PyPNGImage)
    buffer = io.BytesIO()
    img.save(buffer)
    return buffer.getvalue()
