"""Google Sheet range retrieval and room record extraction."""

from .a1 import build_query_url, extract_gid, parse_range
from .extractor import extract_records
from .fetcher import fetch_records, load_records
from .headers import canonicalize, normalize_header
from .models import CanonicalField, CellRange, FetchResult, RoomRecord, SheetReference

__all__ = [
    "CanonicalField",
    "CellRange",
    "FetchResult",
    "RoomRecord",
    "SheetReference",
    "build_query_url",
    "canonicalize",
    "extract_gid",
    "extract_records",
    "fetch_records",
    "load_records",
    "normalize_header",
    "parse_range",
]
