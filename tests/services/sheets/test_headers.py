from __future__ import annotations

import pytest

from roominvoice.services.sheets.headers import (
    CANONICAL_HEADER_MAP,
    canonicalize,
    map_headers,
    normalize_header,
)
from roominvoice.services.sheets.models import FIELD_LABELS, CanonicalField


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Tên Phòng", "TEN PHONG"),
        ("  DV  ", "DV"),
        ("Điện cũ", "DIEN CU"),
        ("điện mới", "DIEN MOI"),
        ("Số người", "SO NGUOI"),
        ("Nước", "NUOC"),
        ("Tổng tiền\nphải thanh toán", "TONG TIEN PHAI THANH TOAN"),
        ("Tổng\r\n\r\nsố điện", "TONG SO DIEN"),
        ('"Tên"', "TEN"),
        ("TIỀN    PHÒNG", "TIEN PHONG"),
        ("", ""),
    ],
)
def test_normalize_header(raw: str, expected: str) -> None:
    assert normalize_header(raw) == expected


def test_normalize_header_handles_non_strings() -> None:
    assert normalize_header(None) == ""
    assert normalize_header(2024) == "2024"


def test_normalize_header_is_idempotent() -> None:
    once = normalize_header("Tổng tiền điện")
    assert normalize_header(once) == once


def test_every_display_label_maps_back_to_its_field() -> None:
    for field, label in FIELD_LABELS.items():
        assert canonicalize(normalize_header(label)) is field


def test_lookup_table_covers_every_field_once() -> None:
    assert sorted(CANONICAL_HEADER_MAP.values(), key=lambda f: f.value) == sorted(
        CanonicalField, key=lambda f: f.value
    )


def test_canonicalize_is_exact_match_only() -> None:
    assert canonicalize("TEN PHONG") is CanonicalField.ROOM_NAME
    assert canonicalize("TEN PHONG 2") is None
    assert canonicalize("ten phong") is None
    assert canonicalize("") is None


def test_map_headers_keeps_positions() -> None:
    mapping = map_headers(["STT", "Tên phòng", "", "Tên", "Ghi chú", "DV"])
    assert mapping == [
        None,
        CanonicalField.ROOM_NAME,
        None,
        CanonicalField.TENANT_NAME,
        None,
        CanonicalField.SERVICE_FEE,
    ]
