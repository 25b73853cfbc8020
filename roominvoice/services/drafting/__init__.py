"""AI drafting of invoice messages."""

from __future__ import annotations

import logging
from datetime import date

from roominvoice.services.invoice.models import PaymentSettings
from roominvoice.services.sheets.models import RoomRecord

from .prompt import create_prompt
from .service import DraftingService

LOGGER = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Đã xảy ra lỗi không xác định khi tạo nội dung hóa đơn."


def get_drafting_service() -> DraftingService:
    """Return the configured drafting backend (Gemini)."""

    from .gemini_service import GeminiDraftingService

    return GeminiDraftingService()


def generate_invoice_content(
    record: RoomRecord,
    payment: PaymentSettings,
    *,
    service: DraftingService | None = None,
    today: date | None = None,
) -> str:
    """Return drafted invoice text, or a readable error message instead of raising.

    The caller shows whatever comes back, so backend failures are reported as
    text rather than propagated.
    """

    prompt = create_prompt(record, payment, today=today)
    try:
        backend = service or get_drafting_service()
        return backend.generate(prompt)
    except Exception as exc:  # noqa: BLE001 - collaborator failures become text
        LOGGER.error("Invoice drafting failed: %s", exc, exc_info=True)
        message = str(exc)
        if message:
            return f"Lỗi khi gọi AI: {message}"
        return UNKNOWN_ERROR_MESSAGE


__all__ = ["DraftingService", "create_prompt", "generate_invoice_content", "get_drafting_service"]
