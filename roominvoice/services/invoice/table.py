"""Room table rendering and export."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd
from openpyxl import Workbook

from roominvoice.services.sheets.models import FIELD_LABELS, CanonicalField, RoomRecord

INDEX_LABEL = "STT"
SHEET_TITLE = "Phòng"

_EXPORT_COLUMNS: Sequence[str] = tuple(FIELD_LABELS[field] for field in CanonicalField)


def records_to_frame(records: Iterable[RoomRecord]) -> pd.DataFrame:
    """Return one row per room with the Vietnamese column labels, numbered from 1."""

    rows = [record.as_labelled() for record in records]
    frame = pd.DataFrame(rows, columns=list(_EXPORT_COLUMNS), dtype=str)
    frame.index = pd.RangeIndex(start=1, stop=len(frame) + 1, name=INDEX_LABEL)
    return frame


def render_room_table(records: Iterable[RoomRecord]) -> str:
    frame = records_to_frame(records)
    if frame.empty:
        return "<empty>"
    return frame.to_string()


def export_rooms(records: Iterable[RoomRecord], path: Path) -> Path:
    """Write the room table to ``.csv`` or ``.xlsx`` depending on the suffix."""

    suffix = path.suffix.lower()
    if suffix not in {".csv", ".xlsx"}:
        raise ValueError(f"unsupported export format: {path.suffix or '<none>'}")

    frame = records_to_frame(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        frame.to_csv(path, encoding="utf-8-sig")
        return path

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append([INDEX_LABEL, *_EXPORT_COLUMNS])
    for index, row in frame.iterrows():
        ws.append([index, *(row.get(col) for col in _EXPORT_COLUMNS)])
    wb.save(path)
    return path


__all__ = ["export_rooms", "records_to_frame", "render_room_table"]
