from datetime import date

from roominvoice.services.invoice.models import PaymentSettings
from roominvoice.services.sheets.models import RoomRecord

INVOICE_DRAFT_PROMPT = """Là một chủ nhà trọ thân thiện, hãy soạn một thông báo hóa đơn tiền nhà tháng {month}/{year} bằng tiếng Việt để gửi cho người thuê.
Sử dụng các thông tin chi tiết sau đây:

**Thông tin người thuê:**
- Tên người thuê: {tenant_name}
- Phòng số: {room_name}

**Chi tiết hóa đơn:**
- Tiền thuê phòng: {room_rent}
- Tiền điện: {electric_cost} (Chỉ số cũ: {electric_previous}, Chỉ số mới: {electric_current}, Tổng số điện: {electric_units})
- Tiền nước: {water_cost}
- Phí dịch vụ khác (DV): {service_fee}
- **TỔNG CỘNG PHẢI THANH TOÁN:** {total_due}

**Thông tin thanh toán:**
- Ngân hàng: {bank_name}
- Số tài khoản: {account_number}
- Tên chủ tài khoản: {account_name}
- Nội dung chuyển khoản yêu cầu: "{payment_note}"

**Yêu cầu về định dạng:**
- Bắt đầu bằng một lời chào thân mật đến người thuê.
- Liệt kê rõ ràng và minh bạch các khoản phí.
- In đậm tổng số tiền cần thanh toán.
- Cung cấp đầy đủ thông tin thanh toán.
- Kết thúc bằng một lời cảm ơn.
- Giữ giọng văn lịch sự, chuyên nghiệp nhưng vẫn gần gũi.
- Không sử dụng markdown. Trả về dưới dạng văn bản thuần túy (plain text).
"""


def create_prompt(record: RoomRecord, payment: PaymentSettings, *, today: date | None = None) -> str:
    """Fill the drafting template with one room's charges and the payment details."""
    today = today or date.today()
    return INVOICE_DRAFT_PROMPT.format(
        month=today.month,
        year=today.year,
        tenant_name=record.tenant_name,
        room_name=record.room_name,
        room_rent=record.room_rent,
        electric_cost=record.electric_cost,
        electric_previous=record.electric_previous,
        electric_current=record.electric_current,
        electric_units=record.electric_units,
        water_cost=record.water_cost,
        service_fee=record.service_fee,
        total_due=record.total_due,
        bank_name=payment.bank_name,
        account_number=payment.account_number,
        account_name=payment.account_name,
        payment_note=payment.resolve_note(today.month),
    )
