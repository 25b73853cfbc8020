"""A1 range notation and sheet URL translation into gviz query URLs."""

from __future__ import annotations

import re
from urllib.parse import quote

from roominvoice.config import DEFAULT_SHEETS_BASE_URL

from .models import CellRange, SheetReference

DEFAULT_GID = "0"

RANGE_PATTERN = re.compile(r"^([A-Z]+)([1-9][0-9]*):([A-Z]+)([1-9][0-9]*)$", re.IGNORECASE | re.ASCII)
SPREADSHEET_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")
GID_PATTERN = re.compile(r"[#?&]gid=([0-9]+)")

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_QUERY_SAFE = "-_.!~*'()"


def column_to_index(letters: str) -> int:
    """Return the zero-based index of a column label (``A`` -> 0, ``AA`` -> 26)."""

    if not letters or not letters.isalpha() or not letters.isascii():
        raise ValueError(f"invalid column letters: {letters!r}")
    index = 0
    for char in letters.upper():
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1


def index_to_column(index: int) -> str:
    """Return the column label for a zero-based index (26 -> ``AA``)."""

    if index < 0:
        raise ValueError(f"column index must be non-negative: {index}")
    letters = []
    remaining = index + 1
    while remaining > 0:
        remaining, rem = divmod(remaining - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def parse_range(range_text: str) -> CellRange | None:
    """Parse ``A1:K29`` style text; ``None`` when the text is not a valid range.

    Both corners are required, letters are case-insensitive and rows start at 1.
    Reversed corners (``K29:A1``) are rejected as well so no negative row window
    can reach the query.
    """

    if not isinstance(range_text, str):
        return None
    match = RANGE_PATTERN.match(range_text.strip())
    if not match:
        return None
    start_col_text, start_row_text, end_col_text, end_row_text = match.groups()
    cell_range = CellRange(
        start_row=int(start_row_text) - 1,
        start_col=column_to_index(start_col_text),
        end_row=int(end_row_text) - 1,
        end_col=column_to_index(end_col_text),
    )
    if cell_range.start_row > cell_range.end_row or cell_range.start_col > cell_range.end_col:
        return None
    return cell_range


def extract_gid(sheet_url: str) -> str:
    """Return the tab id from ``#gid=`` / ``?gid=`` / ``&gid=``, else ``"0"``."""

    match = GID_PATTERN.search(sheet_url or "")
    if match:
        return match.group(1)
    return DEFAULT_GID


def extract_spreadsheet_id(sheet_url: str) -> str | None:
    match = SPREADSHEET_ID_PATTERN.search(sheet_url or "")
    return match.group(1) if match else None


def parse_sheet_reference(sheet_url: str) -> SheetReference | None:
    spreadsheet_id = extract_spreadsheet_id(sheet_url)
    if spreadsheet_id is None:
        return None
    return SheetReference(spreadsheet_id=spreadsheet_id, gid=extract_gid(sheet_url))


def build_query(cell_range: CellRange) -> str:
    """Return the gviz query selecting every column and row of the range."""

    columns = ",".join(
        index_to_column(idx) for idx in range(cell_range.start_col, cell_range.end_col + 1)
    )
    return f"select {columns} limit {cell_range.row_count} offset {cell_range.start_row}"


def build_query_url(
    sheet_url: str,
    cell_range: CellRange,
    gid: str,
    *,
    base_url: str = DEFAULT_SHEETS_BASE_URL,
) -> str | None:
    """Build the gviz JSON endpoint URL, or ``None`` without a spreadsheet id."""

    spreadsheet_id = extract_spreadsheet_id(sheet_url)
    if spreadsheet_id is None:
        return None
    encoded_query = quote(build_query(cell_range), safe=_QUERY_SAFE)
    return (
        f"{base_url.rstrip('/')}/spreadsheets/d/{spreadsheet_id}/gviz/tq"
        f"?tqx=out:json&gid={gid}&tq={encoded_query}"
    )


__all__ = [
    "DEFAULT_GID",
    "build_query",
    "build_query_url",
    "column_to_index",
    "extract_gid",
    "extract_spreadsheet_id",
    "index_to_column",
    "parse_range",
    "parse_sheet_reference",
]
