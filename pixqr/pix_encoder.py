"""PIX (BR Code) payload composer and checksum validator."""
from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from typing import Iterable

from .crc import crc16_ccitt, format_crc
from .services.errors import err_bad_amount
from .tlv import TLVItem, build_tlv, parse_tlv

PIX_GUI = "br.gov.bcb.pix"
PAYLOAD_FORMAT_INDICATOR = "01"
MERCHANT_CATEGORY_CODE = "0000"
CURRENCY_BRL = "986"
CRC_HEADER = "6304"
TXID_LENGTH = 25
MIN_PAYLOAD_LENGTH = 10

_AMOUNT_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


@dataclass(frozen=True)
class MerchantAccount:
    key: str

    def to_subitems(self) -> Iterable[TLVItem]:
        yield TLVItem(tag="00", value=PIX_GUI)
        yield TLVItem(tag="01", value=self.key)


@dataclass(frozen=True)
class AdditionalData:
    txid: str

    def to_subitems(self) -> Iterable[TLVItem]:
        yield TLVItem(tag="05", value=self.txid)


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str
    txid: str


def generate_txid() -> str:
    """Return a fresh lowercase-hex transaction reference."""

    return secrets.token_hex(16)[:TXID_LENGTH]


def _check_amount(amount: str) -> str:
    if not isinstance(amount, str) or not amount:
        raise err_bad_amount("Amount is required")
    if not _AMOUNT_RE.fullmatch(amount):
        raise err_bad_amount(f"Amount {amount!r} is not a decimal number")
    return amount


def compose_payload(
    amount: str,
    merchant_key: str,
    merchant_name: str,
    merchant_city: str,
    country_code: str = "BR",
    *,
    txid: str | None = None,
) -> EncodedPayload:
    """Build a complete PIX payload and append its CRC16 (tag 63)."""

    _check_amount(amount)
    txid = txid if txid is not None else generate_txid()
    items = [
        TLVItem(tag="00", value=PAYLOAD_FORMAT_INDICATOR),
        TLVItem(tag="26", value=build_tlv(MerchantAccount(merchant_key).to_subitems())),
        TLVItem(tag="52", value=MERCHANT_CATEGORY_CODE),
        TLVItem(tag="53", value=CURRENCY_BRL),
        TLVItem(tag="54", value=amount),
        TLVItem(tag="58", value=country_code),
        TLVItem(tag="59", value=merchant_name),
        TLVItem(tag="60", value=merchant_city),
        TLVItem(tag="62", value=build_tlv(AdditionalData(txid).to_subitems())),
    ]
    crc_input = f"{build_tlv(items)}{CRC_HEADER}"
    crc = format_crc(crc16_ccitt(crc_input))
    return EncodedPayload(payload=f"{crc_input}{crc}", crc=crc, txid=txid)


def validate_payload(candidate: str) -> bool:
    """Return True when the trailing 4 characters are the CRC of the rest."""

    try:
        if len(candidate) < MIN_PAYLOAD_LENGTH:
            return False
        prefix, claimed = candidate[:-4], candidate[-4:]
        return format_crc(crc16_ccitt(prefix)) == claimed
    except Exception:  # noqa: BLE001
        return False


def decode_payload(payload: str) -> dict[str, str]:
    """Map top-level tags of a payload to their raw values."""

    return {item.tag: item.value for item in parse_tlv(payload)}
