"""Header normalization and lookup against the fixed room schema."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, List, Optional

from .models import CanonicalField

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_NEWLINES = re.compile(r"[\n\r]+")
_WHITESPACE = re.compile(r"\s+")

# Normalized header text -> field. Exact match only; normalize_header absorbs
# accents, case, quotes and spacing.
CANONICAL_HEADER_MAP: dict[str, CanonicalField] = {
    "TEN PHONG": CanonicalField.ROOM_NAME,
    "TEN": CanonicalField.TENANT_NAME,
    "TIEN PHONG": CanonicalField.ROOM_RENT,
    "SO NGUOI": CanonicalField.OCCUPANTS,
    "DIEN CU": CanonicalField.ELECTRIC_PREVIOUS,
    "DIEN MOI": CanonicalField.ELECTRIC_CURRENT,
    "TONG SO DIEN": CanonicalField.ELECTRIC_UNITS,
    "TONG TIEN DIEN": CanonicalField.ELECTRIC_COST,
    "NUOC": CanonicalField.WATER_COST,
    "DV": CanonicalField.SERVICE_FEE,
    "TONG TIEN PHAI THANH TOAN": CanonicalField.TOTAL_DUE,
}


def normalize_header(raw: object) -> str:
    """Fold a header label to plain uppercase ASCII-ish text.

    ``"Tên Phòng"`` becomes ``"TEN PHONG"``. The crossed D does not decompose
    under NFD, so it is replaced explicitly.
    """

    text = raw if isinstance(raw, str) else ("" if raw is None else str(raw))
    text = unicodedata.normalize("NFD", text)
    text = _COMBINING_MARKS.sub("", text)
    text = text.replace("Đ", "D").replace("đ", "D")
    text = text.upper()
    text = _NEWLINES.sub(" ", text)
    text = text.replace('"', "")
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def canonicalize(normalized: str) -> Optional[CanonicalField]:
    return CANONICAL_HEADER_MAP.get(normalized)


def map_headers(labels: Iterable[object]) -> List[Optional[CanonicalField]]:
    """Map each column label, by position, to its field or ``None``."""

    return [canonicalize(normalize_header(label)) for label in labels]


__all__ = ["CANONICAL_HEADER_MAP", "canonicalize", "map_headers", "normalize_header"]
