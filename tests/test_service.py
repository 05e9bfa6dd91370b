from __future__ import annotations

import pytest

from pixqr.cache import RenderCache
from pixqr.config import Settings
from pixqr.crc import crc16_ccitt, format_crc
from pixqr.pix_encoder import decode_payload
from pixqr.services.errors import ContractViolation
from pixqr.services.generator import PixCodeService


def _service(capacity: int = 4, **overrides) -> PixCodeService:
    options = {
        "merchant_key": "test@example.com",
        "merchant_name": "TEST MERCHANT",
        "merchant_city": "SAO PAULO",
        "qr_width": 128,
    }
    options.update(overrides)
    return PixCodeService(RenderCache(capacity), **options)


def test_generate_code_uses_configured_merchant() -> None:
    result = _service().generate_code("25.90", "order 42")
    fields = decode_payload(result.encoded.payload)
    assert fields["26"].endswith("0116test@example.com")
    assert fields["54"] == "25.90"
    assert fields["58"] == "BR"
    assert fields["59"] == "TEST MERCHANT"
    assert fields["60"] == "SAO PAULO"
    assert fields["62"] == f"0525{result.encoded.txid}"
    assert result.image is None


def test_generate_code_rejects_bad_amount() -> None:
    with pytest.raises(ContractViolation):
        _service().generate_code("ten")


def test_render_image_goes_through_cache() -> None:
    service = _service()
    payload = service.generate_code("1.00").encoded.payload
    first = service.render_image(payload)
    second = service.render_image(payload)
    assert first is second
    assert payload in service.cache


def test_generate_with_image_caches_rendered_code() -> None:
    service = _service(capacity=1)
    result = service.generate_with_image("3.00")
    assert result.image is not None
    assert result.encoded.payload in service.cache
    other = service.generate_with_image("4.00")
    assert result.encoded.payload not in service.cache
    assert other.encoded.payload in service.cache


def test_validate_and_inspect() -> None:
    service = _service()
    payload = service.generate_code("9.99").encoded.payload
    assert service.validate_code(payload) is True
    inspected = service.inspect_code(payload)
    assert inspected.valid is True
    assert inspected.fields is not None and inspected.fields["54"] == "9.99"

    broken = payload[:-1] + ("0" if payload[-1] != "0" else "1")
    assert service.validate_code(broken) is False
    assert service.inspect_code(broken).fields is None


def test_from_settings_wires_cache_capacity() -> None:
    settings = Settings(render_cache_size=7)
    service = PixCodeService.from_settings(settings)
    assert service.cache.capacity == 7
    assert service.merchant_name == settings.merchant_name
    assert service.merchant_key == settings.pix_key


@pytest.mark.parametrize("raw_length", ["-4", "+4", " 4"])
def test_inspect_checksum_valid_code_with_signed_length(raw_length: str) -> None:
    prefix = f"00{raw_length}000000006304"
    pix_code = prefix + format_crc(crc16_ccitt(prefix))
    inspected = _service().inspect_code(pix_code)
    assert inspected.valid is True
    assert inspected.fields is None
