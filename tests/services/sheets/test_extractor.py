from __future__ import annotations

from typing import Any

import pytest

from roominvoice.core.errors import ExtractionError, FailureKind
from roominvoice.services.sheets.extractor import (
    UNKNOWN_PROVIDER_ERROR,
    collect_error_messages,
    extract_records,
)
from roominvoice.services.sheets.models import CanonicalField, RoomRecord

LABELS = [
    "TÊN PHÒNG",
    "TÊN",
    "TIỀN PHÒNG",
    "SỐ NGƯỜI",
    "ĐIỆN CŨ",
    "ĐIỆN MỚI",
    "TỔNG SỐ ĐIỆN",
    "TỔNG TIỀN ĐIỆN",
    "NƯỚC",
    "DV",
    "TỔNG TIỀN PHẢI THANH TOÁN",
]


def _cell(value: Any, formatted: str | None = None) -> dict[str, Any] | None:
    if value is None and formatted is None:
        return None
    cell: dict[str, Any] = {"v": value}
    if formatted is not None:
        cell["f"] = formatted
    return cell


def _payload(labels: list[str], rows: list[list[Any]]) -> dict[str, Any]:
    return {
        "version": "0.6",
        "status": "ok",
        "table": {
            "cols": [{"id": chr(ord("A") + idx), "label": label, "type": "string"} for idx, label in enumerate(labels)],
            "rows": [{"c": list(row)} for row in rows],
        },
    }


def test_extracts_full_row_with_formatted_values() -> None:
    row = [
        _cell("P101"),
        _cell("Nguyễn Văn B"),
        _cell(3000000.0, "3.000.000 đ"),
        _cell(2.0),
        _cell(1200.0),
        _cell(1350.0),
        _cell(150.0),
        _cell(525000.0, "525.000 đ"),
        _cell(100000.0, "100.000 đ"),
        _cell(50000.0, "50.000 đ"),
        _cell(3675000.0, "3.675.000 đ"),
    ]

    records = extract_records(_payload(LABELS, [row]))

    assert records == [
        RoomRecord(
            room_name="P101",
            tenant_name="Nguyễn Văn B",
            room_rent="3.000.000 đ",
            occupants="2",
            electric_previous="1200",
            electric_current="1350",
            electric_units="150",
            electric_cost="525.000 đ",
            water_cost="100.000 đ",
            service_fee="50.000 đ",
            total_due="3.675.000 đ",
        )
    ]


def test_partial_columns_leave_missing_fields_empty() -> None:
    payload = _payload(["Tên phòng", "Tên", "Ghi chú", "Tổng tiền phải thanh toán"], [
        [_cell("P1"), _cell("An"), _cell("đã cọc"), _cell(None, "1.000 đ")],
    ])

    records = extract_records(payload)

    assert len(records) == 1
    record = records[0]
    assert record.room_name == "P1"
    assert record[CanonicalField.TOTAL_DUE] == "1.000 đ"
    assert record.water_cost == ""
    assert record.electric_units == ""


def test_rows_without_values_or_names_are_dropped() -> None:
    payload = _payload(LABELS[:3], [
        [_cell("P1"), _cell("An"), _cell(1.0)],
        [None, None, None],
        [_cell(""), _cell("  "), _cell(5.0)],
        [_cell("P3"), None, None],
        [None, _cell("Bình"), None],
    ])
    payload["table"]["rows"].insert(1, {"c": []})
    payload["table"]["rows"].append({})

    records = extract_records(payload)

    assert [(r.room_name, r.tenant_name) for r in records] == [("P1", "An"), ("P3", ""), ("", "Bình")]


def test_duplicates_and_sheet_order_are_kept() -> None:
    payload = _payload(LABELS[:3], [
        [_cell("P2"), _cell("B"), _cell(1.0)],
        [_cell("P1"), _cell("A"), _cell(1.0)],
        [_cell("P2"), _cell("B"), _cell(1.0)],
    ])

    assert [r.room_name for r in extract_records(payload)] == ["P2", "P1", "P2"]


def test_short_rows_are_tolerated() -> None:
    payload = _payload(LABELS[:4], [[_cell("P1"), _cell("An")]])

    (record,) = extract_records(payload)

    assert record.room_rent == ""
    assert record.occupants == ""


def test_later_duplicate_header_wins() -> None:
    payload = _payload(["TÊN PHÒNG", "TÊN", "DV", "DV"], [
        [_cell("P1"), _cell("An"), _cell("10"), _cell("20")],
    ])

    (record,) = extract_records(payload)

    assert record.service_fee == "20"


def test_cell_text_prefers_formatted_then_raw() -> None:
    payload = _payload(LABELS[:5], [
        [_cell("P1"), _cell(" An "), _cell(1.5), _cell(True), _cell(0.0, "")],
    ])

    (record,) = extract_records(payload)

    assert record.tenant_name == "An"
    assert record.room_rent == "1.5"
    assert record.occupants == "true"
    assert record.electric_previous == ""


def test_too_few_recognised_headers_raise() -> None:
    payload = _payload(["TÊN PHÒNG", "TÊN", "Ghi chú"], [[_cell("P1"), _cell("An"), _cell("x")]])

    with pytest.raises(ExtractionError) as excinfo:
        extract_records(payload)

    assert excinfo.value.kind is FailureKind.EXTRACTION
    assert "TÊN PHÒNG" in excinfo.value.message


def test_three_recognised_headers_are_enough() -> None:
    payload = _payload(["TÊN PHÒNG", "TÊN", "DV"], [[_cell("P1"), _cell("An"), _cell("x")]])

    assert len(extract_records(payload)) == 1


def test_zero_rows_yield_empty_list() -> None:
    assert extract_records(_payload(LABELS, [])) == []


def test_missing_table_is_empty() -> None:
    assert extract_records({"status": "ok"}) == []
    assert extract_records({"table": {"cols": []}}) == []
    assert extract_records(None) == []


def test_missing_table_with_errors_raises() -> None:
    payload = {"status": "warning", "errors": [{"message": "a"}, {"detailed_message": "b", "message": "ignored"}]}

    with pytest.raises(ExtractionError) as excinfo:
        extract_records(payload)

    assert excinfo.value.message == "Lỗi từ Google Sheets: a, b"


def test_extraction_is_idempotent() -> None:
    payload = _payload(LABELS[:3], [[_cell("P1"), _cell("An"), _cell(1.0)]])

    assert extract_records(payload) == extract_records(payload)


def test_collect_error_messages_ignores_junk() -> None:
    assert collect_error_messages(None) == []
    assert collect_error_messages("oops") == []
    assert collect_error_messages([{"message": ""}, {"reason": "x"}, "plain"]) == ["plain"]


def test_single_error_object_without_table_raises() -> None:
    with pytest.raises(ExtractionError) as excinfo:
        extract_records({"status": "error", "errors": {"detailed_message": "Sheet not found"}})

    assert excinfo.value.message == "Lỗi từ Google Sheets: Sheet not found"


def test_unreadable_errors_fall_back_to_generic_text() -> None:
    with pytest.raises(ExtractionError) as excinfo:
        extract_records({"status": "error", "errors": 42})

    assert excinfo.value.message == f"Lỗi từ Google Sheets: {UNKNOWN_PROVIDER_ERROR}"
