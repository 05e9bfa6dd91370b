from __future__ import annotations

import pytest

from pixqr.services.errors import ContractViolation
from pixqr.tlv import TLVItem, build_tlv, encode_field, parse_tlv


def test_encode_field_zero_pads_length() -> None:
    assert encode_field("53", "986") == "5303986"
    assert encode_field("00", "01") == "000201"
    assert encode_field("62", "") == "6200"


def test_encode_field_accepts_99_characters() -> None:
    encoded = encode_field("59", "x" * 99)
    assert encoded.startswith("5999")
    assert len(encoded) == 103


def test_encode_field_rejects_100_characters() -> None:
    with pytest.raises(ContractViolation) as excinfo:
        encode_field("59", "x" * 100)
    assert excinfo.value.code == "ERR_FIELD_TOO_LONG"


def test_encode_field_rejects_non_ascii() -> None:
    with pytest.raises(ContractViolation) as excinfo:
        encode_field("60", "SÃO PAULO")
    assert excinfo.value.code == "ERR_NON_ASCII"


@pytest.mark.parametrize("tag", ["1", "123", "ab", ""])
def test_encode_field_rejects_malformed_tags(tag: str) -> None:
    with pytest.raises(ContractViolation):
        encode_field(tag, "value")


def test_build_tlv_nested_length_is_sum_of_encoded_subfields() -> None:
    inner = build_tlv([TLVItem("00", "br.gov.bcb.pix"), TLVItem("01", "key")])
    assert inner == "0014br.gov.bcb.pix0103key"
    assert encode_field("26", inner) == f"26{len(inner):02d}{inner}"
    assert len(inner) == 25


def test_parse_tlv_splits_items() -> None:
    items = list(parse_tlv("000201530398654041.505802BR"))
    assert [(item.tag, item.value) for item in items] == [
        ("00", "01"),
        ("53", "986"),
        ("54", "1.50"),
        ("58", "BR"),
    ]


def test_parse_tlv_rejects_overrunning_length() -> None:
    with pytest.raises(ValueError, match="exceeds payload"):
        list(parse_tlv("5910SHORT"))


def test_parse_tlv_rejects_truncated_header() -> None:
    with pytest.raises(ValueError, match="Truncated"):
        list(parse_tlv("000201ab"))


@pytest.mark.parametrize("raw_length", ["-4", "+4", " 4", "ab", "4 "])
def test_parse_tlv_rejects_non_digit_length(raw_length: str) -> None:
    with pytest.raises(ValueError, match="non-numeric length"):
        list(parse_tlv(f"00{raw_length}0000006304ABCD"))


def test_parse_tlv_accepts_empty_value() -> None:
    assert [(item.tag, item.value) for item in parse_tlv("62005802BR")] == [("62", ""), ("58", "BR")]


def test_contract_violation_body_carries_code_and_message() -> None:
    with pytest.raises(ContractViolation) as excinfo:
        encode_field("59", "x" * 100)
    assert excinfo.value.status_code == 400
    assert excinfo.value.to_body() == {
        "code": "ERR_FIELD_TOO_LONG",
        "message": "Field 59 value has 100 characters, maximum is 99",
    }
