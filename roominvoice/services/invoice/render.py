"""Invoice assembly and text layouts (screen/print sheet and copyable text)."""

from __future__ import annotations

from datetime import date
from typing import List

from roominvoice.services.sheets.models import RoomRecord

from .models import Invoice, InvoiceItem, PaymentSettings

RENT_LABEL = "Tiền thuê phòng"
ELECTRIC_LABEL = "Tiền điện"
WATER_LABEL = "Tiền nước"
SERVICE_LABEL = "Phí dịch vụ"

# Amounts the sheet writes for "nothing charged"; omitted from the copy text.
ZERO_AMOUNTS = {"", "0", "0 đ"}

SHEET_WIDTH = 64
_LABEL_WIDTH = 18
_AMOUNT_WIDTH = 18


def build_invoice(record: RoomRecord, payment: PaymentSettings, *, today: date | None = None) -> Invoice:
    """Assemble the invoice for one room as of ``today`` (defaults to now)."""

    today = today or date.today()
    electric_detail = (
        f"Cũ: {record.electric_previous} Mới: {record.electric_current} "
        f"({record.electric_units} kWh)"
    )
    items = [
        InvoiceItem(label=RENT_LABEL, amount=record.room_rent),
        InvoiceItem(label=ELECTRIC_LABEL, amount=record.electric_cost, detail=electric_detail),
        InvoiceItem(label=WATER_LABEL, amount=record.water_cost),
        InvoiceItem(label=SERVICE_LABEL, amount=record.service_fee),
    ]
    return Invoice(
        room_name=record.room_name,
        tenant_name=record.tenant_name,
        occupants=record.occupants,
        month=today.month,
        year=today.year,
        issued_on=today.strftime("%d/%m/%Y"),
        items=items,
        electric_previous=record.electric_previous,
        electric_current=record.electric_current,
        electric_units=record.electric_units,
        total_due=record.total_due,
        bank_name=payment.bank_name,
        account_number=payment.account_number,
        account_name=payment.account_name,
        payment_note=payment.resolve_note(today.month),
    )


def _two_sides(left: str, right: str, width: int = SHEET_WIDTH) -> str:
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def _item_row(label: str, detail: str, amount: str) -> str:
    detail_width = SHEET_WIDTH - _LABEL_WIDTH - _AMOUNT_WIDTH
    return f"{label:<{_LABEL_WIDTH}}{detail:<{detail_width}}{amount:>{_AMOUNT_WIDTH}}"


def render_invoice_sheet(invoice: Invoice) -> str:
    """Lay the invoice out for the screen or a printer."""

    rule = "-" * SHEET_WIDTH
    lines: List[str] = [
        _two_sides("HÓA ĐƠN TIỀN NHÀ", f"Phòng {invoice.room_name}"),
        _two_sides(f"Tháng {invoice.month}/{invoice.year}", f"Ngày xuất: {invoice.issued_on}"),
        "",
    ]
    recipient = f"Gửi đến: {invoice.tenant_name}"
    if invoice.occupants:
        lines.append(_two_sides(recipient, f"Số người: {invoice.occupants}"))
    else:
        lines.append(recipient)
    lines += ["", _item_row("Mục", "Chi tiết", "Thành tiền"), rule]
    for item in invoice.items:
        lines.append(_item_row(item.label, item.detail, item.amount or "-"))
    lines += [
        rule,
        _two_sides("TỔNG CỘNG", invoice.total_due),
        "",
        "Thông tin thanh toán",
        f"Ngân hàng: {invoice.bank_name}",
        f"Chủ tài khoản: {invoice.account_name}",
        f"Số tài khoản: {invoice.account_number}",
        f'Nội dung: "{invoice.payment_note}"',
        "",
        "Cảm ơn bạn đã thanh toán đúng hạn!",
    ]
    return "\n".join(lines)


def _charged(amount: str) -> bool:
    return amount.strip() not in ZERO_AMOUNTS


def render_plain_text(invoice: Invoice) -> str:
    """Return the short message a landlord pastes into a chat app.

    Charges the sheet reports as empty or zero are left out, and the meter
    readings are only mentioned when some electricity was used.
    """

    item_lines: List[str] = []
    for item in invoice.items:
        if not _charged(item.amount):
            continue
        line = f"- {item.label}: {item.amount}"
        if item.label == ELECTRIC_LABEL and invoice.electric_units and invoice.electric_units != "0":
            line += (
                f" (Cũ: {invoice.electric_previous}, Mới: {invoice.electric_current}, "
                f"Dùng: {invoice.electric_units} kWh)"
            )
        item_lines.append(line)

    lines = [
        f"Chào bạn {invoice.tenant_name},",
        (
            f"Nhà trọ xin gửi bạn thông báo tiền nhà tháng {invoice.month}/{invoice.year} "
            f"cho phòng {invoice.room_name} (Số người: {invoice.occupants or 'N/A'})."
        ),
        "Chi tiết các khoản phí:",
        *item_lines,
        "------------------------------------",
        f"TỔNG CỘNG THANH TOÁN: {invoice.total_due}",
        "------------------------------------",
        "Bạn vui lòng thanh toán sớm.",
        "Thông tin chuyển khoản:",
        f"- Ngân hàng: {invoice.bank_name}",
        f"- Số tài khoản: {invoice.account_number}",
        f"- Chủ tài khoản: {invoice.account_name}",
        f'- Nội dung: "{invoice.payment_note}"',
        "Cảm ơn bạn!",
    ]
    return "\n".join(stripped for stripped in (line.strip() for line in lines) if stripped)


__all__ = ["build_invoice", "render_invoice_sheet", "render_plain_text"]
