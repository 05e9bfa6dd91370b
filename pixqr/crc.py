"""CRC16-CCITT (FALSE variant) implementation."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt(data: str) -> int:
    """Compute CRC16-CCITT (0x1021, init 0xFFFF) for EMV payload strings.

    Each character contributes its code point truncated to a single byte.
    """

    checksum = CRC16_INIT
    for ch in data:
        checksum ^= (ord(ch) & 0xFF) << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return checksum


def format_crc(value: int) -> str:
    return f"{value:04X}"
