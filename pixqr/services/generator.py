"""PIX code generation, rendering and validation services."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial

from ..cache import RenderCache
from ..config import Settings
from ..monitoring import record_validation
from ..pix_encoder import EncodedPayload, compose_payload, decode_payload, validate_payload
from ..renderer import RenderedImage, render_qr_payload

logger = logging.getLogger("pixqr.service")


@dataclass(slots=True)
class GenerateResult:
    encoded: EncodedPayload
    image: RenderedImage | None = None


@dataclass(slots=True)
class InspectResult:
    valid: bool
    fields: dict[str, str] | None = None


class PixCodeService:
    def __init__(
        self,
        cache: RenderCache[RenderedImage],
        *,
        merchant_key: str,
        merchant_name: str,
        merchant_city: str,
        country_code: str = "BR",
        qr_width: int = 256,
        qr_margin: int = 1,
    ):
        self.cache = cache
        self.merchant_key = merchant_key
        self.merchant_name = merchant_name
        self.merchant_city = merchant_city
        self.country_code = country_code
        self._render = partial(render_qr_payload, width=qr_width, margin=qr_margin)

    @classmethod
    def from_settings(cls, settings: Settings, cache: RenderCache[RenderedImage] | None = None) -> "PixCodeService":
        return cls(
            cache if cache is not None else RenderCache(settings.render_cache_size),
            merchant_key=settings.pix_key,
            merchant_name=settings.merchant_name,
            merchant_city=settings.merchant_city,
            country_code=settings.country_code,
            qr_width=settings.qr_width,
            qr_margin=settings.qr_margin,
        )

    def generate_code(self, amount: str, description: str = "") -> GenerateResult:
        encoded = compose_payload(
            amount,
            self.merchant_key,
            self.merchant_name,
            self.merchant_city,
            self.country_code,
        )
        logger.info(
            "pix code generated",
            extra={"txid": encoded.txid, "amount": amount, "description": description, "crc": encoded.crc},
        )
        return GenerateResult(encoded=encoded)

    def render_image(self, payload: str) -> RenderedImage:
        return self.cache.get_or_render(payload, self._render)

    def generate_with_image(self, amount: str, description: str = "") -> GenerateResult:
        result = self.generate_code(amount, description)
        result.image = self.render_image(result.encoded.payload)
        return result

    def validate_code(self, payload: str) -> bool:
        valid = validate_payload(payload)
        record_validation(valid)
        return valid

    def inspect_code(self, payload: str) -> InspectResult:
        if not self.validate_code(payload):
            return InspectResult(valid=False)
        try:
            fields = decode_payload(payload)
        except ValueError:
            logger.warning("checksum matched but TLV structure is malformed", extra={"payload_length": len(payload)})
            return InspectResult(valid=True)
        return InspectResult(valid=True, fields=fields)
