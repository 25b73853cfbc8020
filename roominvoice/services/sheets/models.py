"""Domain models for the sheet retrieval pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from roominvoice.core.errors import FailureKind


class CanonicalField(str, Enum):
    """The closed set of columns every room record carries.

    Values match the attribute names of :class:`RoomRecord`.
    """

    ROOM_NAME = "room_name"
    TENANT_NAME = "tenant_name"
    ROOM_RENT = "room_rent"
    OCCUPANTS = "occupants"
    ELECTRIC_PREVIOUS = "electric_previous"
    ELECTRIC_CURRENT = "electric_current"
    ELECTRIC_UNITS = "electric_units"
    ELECTRIC_COST = "electric_cost"
    WATER_COST = "water_cost"
    SERVICE_FEE = "service_fee"
    TOTAL_DUE = "total_due"


FIELD_LABELS: dict[CanonicalField, str] = {
    CanonicalField.ROOM_NAME: "TÊN PHÒNG",
    CanonicalField.TENANT_NAME: "TÊN",
    CanonicalField.ROOM_RENT: "TIỀN PHÒNG",
    CanonicalField.OCCUPANTS: "SỐ NGƯỜI",
    CanonicalField.ELECTRIC_PREVIOUS: "ĐIỆN CŨ",
    CanonicalField.ELECTRIC_CURRENT: "ĐIỆN MỚI",
    CanonicalField.ELECTRIC_UNITS: "TỔNG SỐ ĐIỆN",
    CanonicalField.ELECTRIC_COST: "TỔNG TIỀN ĐIỆN",
    CanonicalField.WATER_COST: "NƯỚC",
    CanonicalField.SERVICE_FEE: "DV",
    CanonicalField.TOTAL_DUE: "TỔNG TIỀN PHẢI THANH TOÁN",
}


@dataclass(frozen=True, slots=True)
class CellRange:
    """Zero-based inclusive bounds parsed from A1 notation."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def row_count(self) -> int:
        return self.end_row - self.start_row + 1


@dataclass(frozen=True, slots=True)
class SheetReference:
    """Spreadsheet document plus the tab (gid) inside it."""

    spreadsheet_id: str
    gid: str = "0"


@dataclass(frozen=True)
class RoomRecord:
    """One room row; every field is a string, empty when the sheet had nothing."""

    room_name: str = ""
    tenant_name: str = ""
    room_rent: str = ""
    occupants: str = ""
    electric_previous: str = ""
    electric_current: str = ""
    electric_units: str = ""
    electric_cost: str = ""
    water_cost: str = ""
    service_fee: str = ""
    total_due: str = ""

    @classmethod
    def from_fields(cls, values: Mapping[CanonicalField, str]) -> "RoomRecord":
        """Build a record, filling every field the mapping lacks with ``""``."""

        return cls(**{field.value: values.get(field, "") or "" for field in CanonicalField})

    def __getitem__(self, field: CanonicalField) -> str:
        return getattr(self, CanonicalField(field).value)

    def as_labelled(self) -> dict[str, str]:
        """Return values keyed by their Vietnamese column label."""

        return {FIELD_LABELS[CanonicalField(f.name)]: getattr(self, f.name) for f in fields(self)}


class FetchFailure(BaseModel):
    """User-facing failure description."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    status_code: int | None = None


class FetchResult(BaseModel):
    """Aggregated outcome returned to callers of ``fetch_records``.

    Either records are present (``ok``) or ``failure`` is set. A well-formed
    range without usable rows is a failure of kind ``NO_DATA`` so callers must
    handle it explicitly. Failures never carry records.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    records: List[RoomRecord] = Field(default_factory=list)
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def no_data(self) -> bool:
        return self.failure is not None and self.failure.kind == FailureKind.NO_DATA

    @classmethod
    def success(cls, records: List[RoomRecord]) -> "FetchResult":
        return cls(records=list(records))

    @classmethod
    def failed(cls, kind: FailureKind, message: str, *, status_code: int | None = None) -> "FetchResult":
        return cls(failure=FetchFailure(kind=kind, message=message, status_code=status_code))


__all__ = [
    "CanonicalField",
    "CellRange",
    "FIELD_LABELS",
    "FetchFailure",
    "FetchResult",
    "RoomRecord",
    "SheetReference",
]
