"""Invoice rendering service package."""

from .models import Invoice, InvoiceItem, PaymentSettings
from .render import build_invoice, render_invoice_sheet, render_plain_text
from .table import export_rooms, records_to_frame, render_room_table

__all__ = [
    "Invoice",
    "InvoiceItem",
    "PaymentSettings",
    "build_invoice",
    "export_rooms",
    "records_to_frame",
    "render_invoice_sheet",
    "render_plain_text",
    "render_room_table",
]
