"""Turn a gviz table payload into room records."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from roominvoice.core.errors import ExtractionError

from .headers import map_headers
from .models import CanonicalField, RoomRecord

LOGGER = logging.getLogger(__name__)

# Fewer recognised columns than this almost always means the selected range
# has no header row.
MIN_RECOGNISED_HEADERS = 3

MISSING_HEADERS_MESSAGE = (
    "Không tìm thấy các tiêu đề cột cần thiết (vd: 'TÊN PHÒNG', 'TÊN') trong vùng "
    "dữ liệu bạn đã chọn. Vui lòng kiểm tra lại vùng dữ liệu có bao gồm hàng tiêu đề không."
)
UNKNOWN_PROVIDER_ERROR = "Lỗi không xác định từ Google API."


def collect_error_messages(errors: Any) -> List[str]:
    """Return the human readable text of a gviz ``errors`` list or single error."""

    messages: List[str] = []
    if isinstance(errors, Mapping):
        errors = [errors]
    if not isinstance(errors, Sequence) or isinstance(errors, (str, bytes)):
        return messages
    for entry in errors:
        if isinstance(entry, Mapping):
            text = entry.get("detailed_message") or entry.get("message")
        else:
            text = entry
        if text:
            messages.append(str(text))
    return messages


def _cell_text(cell: Any) -> str:
    if not isinstance(cell, Mapping):
        return ""
    value = cell.get("f")
    if value is None:
        value = cell.get("v")
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _table_parts(payload: Any) -> tuple[Optional[list], Optional[list]]:
    if not isinstance(payload, Mapping):
        return None, None
    table = payload.get("table")
    if not isinstance(table, Mapping):
        return None, None
    cols, rows = table.get("cols"), table.get("rows")
    if not isinstance(cols, list) or not isinstance(rows, list):
        return None, None
    return cols, rows


def _row_values(
    row: Any, header_mapping: List[Optional[CanonicalField]]
) -> Optional[Dict[CanonicalField, str]]:
    if not isinstance(row, Mapping):
        return None
    cells = row.get("c")
    if not cells:
        return None

    entry: Dict[CanonicalField, str] = {}
    has_any_value = False
    for index, field in enumerate(header_mapping):
        if field is None or index >= len(cells):
            continue
        value = _cell_text(cells[index])
        entry[field] = value
        if value:
            has_any_value = True
    return entry if has_any_value else None


def extract_records(payload: Any) -> List[RoomRecord]:
    """Map a parsed gviz payload onto :class:`RoomRecord` objects.

    Args:
        payload: Decoded JSON from the gviz endpoint
            (``{"table": {"cols": [...], "rows": [...]}, ...}``).

    Returns:
        Records in sheet order. Rows with no mapped value, and rows with neither
        a room name nor a tenant name, are dropped. Duplicates are kept.

    Raises:
        ExtractionError: If the payload has no table but reports errors, or
            fewer than ``MIN_RECOGNISED_HEADERS`` columns are recognised.
    """

    cols, rows = _table_parts(payload)
    if cols is None or rows is None:
        errors = payload.get("errors") if isinstance(payload, Mapping) else None
        if errors:
            messages = collect_error_messages(errors)
            detail = ", ".join(messages) or UNKNOWN_PROVIDER_ERROR
            raise ExtractionError(f"Lỗi từ Google Sheets: {detail}")
        LOGGER.debug("Payload carried no table structure; treating as empty range")
        return []

    labels = [(col.get("label") or "") if isinstance(col, Mapping) else "" for col in cols]
    header_mapping = map_headers(labels)
    recognised = [field for field in header_mapping if field is not None]
    if len(recognised) < MIN_RECOGNISED_HEADERS:
        LOGGER.info("Only %s recognised headers in %s", len(recognised), labels)
        raise ExtractionError(MISSING_HEADERS_MESSAGE)

    records: List[RoomRecord] = []
    for row in rows:
        values = _row_values(row, header_mapping)
        if values is None:
            continue
        room_name = values.get(CanonicalField.ROOM_NAME, "")
        tenant_name = values.get(CanonicalField.TENANT_NAME, "")
        if not room_name and not tenant_name:
            continue
        records.append(RoomRecord.from_fields(values))

    LOGGER.debug("Extracted %s records from %s rows", len(records), len(rows))
    return records


__all__ = [
    "MIN_RECOGNISED_HEADERS",
    "UNKNOWN_PROVIDER_ERROR",
    "collect_error_messages",
    "extract_records",
]
