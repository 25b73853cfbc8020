from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from roominvoice.services.invoice import export_rooms, records_to_frame, render_room_table
from roominvoice.services.sheets.models import RoomRecord

RECORDS = [
    RoomRecord(room_name="P101", tenant_name="An", room_rent="3.000.000 đ", total_due="3.500.000 đ"),
    RoomRecord(room_name="P102", tenant_name="Bình", water_cost="100.000 đ"),
]


def test_records_to_frame_numbers_rows_from_one() -> None:
    frame = records_to_frame(RECORDS)

    assert list(frame.index) == [1, 2]
    assert frame.index.name == "STT"
    assert list(frame.columns)[:2] == ["TÊN PHÒNG", "TÊN"]
    assert len(frame.columns) == 11
    assert frame.loc[2, "NƯỚC"] == "100.000 đ"
    assert frame.loc[2, "TIỀN PHÒNG"] == ""


def test_render_room_table() -> None:
    text = render_room_table(RECORDS)

    assert "P101" in text
    assert "Bình" in text
    assert render_room_table([]) == "<empty>"


def test_export_csv(tmp_path: Path) -> None:
    target = tmp_path / "exports" / "rooms.csv"

    written = export_rooms(RECORDS, target)

    assert written == target
    assert target.read_bytes().startswith(b"\xef\xbb\xbf")
    frame = pd.read_csv(target, encoding="utf-8-sig", dtype=str, keep_default_na=False)
    assert list(frame["STT"]) == ["1", "2"]
    assert list(frame["TÊN PHÒNG"]) == ["P101", "P102"]


def test_export_xlsx(tmp_path: Path) -> None:
    target = tmp_path / "rooms.xlsx"

    export_rooms(RECORDS, target)

    wb = load_workbook(target)
    ws = wb.active
    assert ws.title == "Phòng"
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0][:3] == ("STT", "TÊN PHÒNG", "TÊN")
    assert rows[1][:3] == (1, "P101", "An")
    assert rows[2][1] == "P102"
    assert len(rows) == 3


def test_export_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_rooms(RECORDS, tmp_path / "rooms.json")
    assert not (tmp_path / "rooms.json").exists()
