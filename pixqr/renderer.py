"""QR image renderer for PIX payloads."""
from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass

import qrcode
from PIL import Image
from qrcode.exceptions import DataOverflowError

from .services.errors import err_render_failed

logger = logging.getLogger("pixqr.renderer")


@dataclass(frozen=True)
class RenderedImage:
    png_bytes: bytes

    @property
    def png_base64(self) -> str:
        return base64.b64encode(self.png_bytes).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:image/png;base64,{self.png_base64}"


def generate_qr_image(data: str, *, width: int = 256, margin: int = 1) -> Image.Image:
    """Generate a square black-on-white QR image ``width`` pixels wide.

    Modules are drawn at a whole number of pixels each and the symbol is
    centred on a white canvas, so every module has the same size.
    """

    qr = qrcode.QRCode(version=None, error_correction=qrcode.constants.ERROR_CORRECT_M, border=margin)
    qr.add_data(data)
    qr.make(fit=True)

    qr.box_size = max(1, width // (qr.modules_count + 2 * margin))
    qr_img = qr.make_image(fill_color="#000000", back_color="#FFFFFF").convert("RGB")

    side = max(width, qr_img.size[0])
    canvas = Image.new("RGB", (side, side), color="#FFFFFF")
    offset = (side - qr_img.size[0]) // 2
    canvas.paste(qr_img, (offset, offset))
    return canvas


def qr_image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_qr_payload(payload: str, *, width: int = 256, margin: int = 1) -> RenderedImage:
    """Render payload into PNG bytes."""

    try:
        image = generate_qr_image(payload, width=width, margin=margin)
        png_bytes = qr_image_to_png_bytes(image)
    except (ValueError, OSError, DataOverflowError) as exc:
        logger.exception("qr rendering failed", extra={"payload_length": len(payload)})
        raise err_render_failed() from exc
    return RenderedImage(png_bytes=png_bytes)
