"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .services.errors import err_bad_tag, err_field_too_long, err_non_ascii

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        if len(self.tag) != 2 or not (self.tag.isascii() and self.tag.isdigit()):
            raise err_bad_tag(self.tag)
        if not self.value.isascii():
            raise err_non_ascii(self.tag)
        if len(self.value) > MAX_VALUE_LENGTH:
            raise err_field_too_long(self.tag, len(self.value))
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


def encode_field(tag: str, value: str) -> str:
    """Encode a single field as ``tag + 2-digit length + value``."""

    return TLVItem(tag=tag, value=value).serialize()


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def parse_tlv(payload: str) -> Iterator[TLVItem]:
    """Split a TLV string back into items.

    Each header must be two characters of tag followed by two ASCII digits of
    length; anything else raises ``ValueError``.
    """

    pos = 0
    end = len(payload)
    while pos < end:
        header = payload[pos : pos + 4]
        if len(header) < 4:
            raise ValueError(f"Truncated TLV header at offset {pos}")
        tag, raw_length = header[:2], header[2:]
        if not (raw_length.isascii() and raw_length.isdigit()):
            raise ValueError(f"TLV field {tag} has non-numeric length {raw_length!r}")
        value_end = pos + 4 + int(raw_length)
        if value_end > end:
            raise ValueError(f"TLV field {tag} length exceeds payload")
        yield TLVItem(tag=tag, value=payload[pos + 4 : value_end])
        pos = value_end
