"""Data models used by the invoice renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, ConfigDict

MONTH_PLACEHOLDER = "{thang}"


class PaymentSettings(BaseModel):
    """Bank transfer details printed on every invoice."""

    model_config = ConfigDict(frozen=True)

    bank_name: str
    account_number: str
    account_name: str
    payment_note: str = ""

    def resolve_note(self, month: int) -> str:
        """Return the payment note with the first ``{thang}`` replaced by ``month``."""

        return self.payment_note.replace(MONTH_PLACEHOLDER, str(month), 1)


@dataclass(frozen=True, slots=True)
class InvoiceItem:
    """One charge line: label, optional detail text and the sheet's own amount."""

    label: str
    amount: str
    detail: str = "-"


@dataclass(frozen=True, slots=True)
class Invoice:
    """Everything needed to lay out one room's monthly invoice."""

    room_name: str
    tenant_name: str
    occupants: str
    month: int
    year: int
    issued_on: str
    items: List[InvoiceItem] = field(default_factory=list)
    electric_previous: str = ""
    electric_current: str = ""
    electric_units: str = ""
    total_due: str = ""
    bank_name: str = ""
    account_number: str = ""
    account_name: str = ""
    payment_note: str = ""


__all__ = ["Invoice", "InvoiceItem", "MONTH_PLACEHOLDER", "PaymentSettings"]
