"""Fetch a sheet range from the public gviz endpoint and map it to records."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List

import requests
from requests.exceptions import RequestException

from roominvoice.config import SheetsConfig, resolve_sheets_config
from roominvoice.core.errors import (
    AccessOrRangeError,
    ConfigError,
    FailureKind,
    InvalidInputError,
    ProtocolError,
    ProviderError,
    SheetsError,
    TransportError,
)

from .a1 import build_query_url, extract_gid, parse_range
from .extractor import UNKNOWN_PROVIDER_ERROR, collect_error_messages, extract_records
from .models import FetchResult, RoomRecord

LOGGER = logging.getLogger(__name__)

RESPONSE_PATTERN = re.compile(r"google\.visualization\.Query\.setResponse\(([\s\S]*)\)")
ACCESS_ERROR_STATUS = {400, 404}

INVALID_URL_MESSAGE = "Link Google Sheet không hợp lệ. Vui lòng kiểm tra lại."
INVALID_RESPONSE_MESSAGE = (
    "Phản hồi không hợp lệ từ Google. Vui lòng kiểm tra lại Link và quyền truy cập của Sheet."
)
INVALID_JSON_MESSAGE = (
    "Lỗi phân tích dữ liệu: Phản hồi từ Google không phải là JSON hợp lệ. Vui lòng kiểm tra "
    "lại link, vùng dữ liệu và quyền truy cập của Sheet."
)
NO_DATA_MESSAGE = (
    "Không tìm thấy dữ liệu có thể xử lý trong vùng bạn chọn. Hãy đảm bảo vùng dữ liệu "
    "không bị trống và có các cột cần thiết."
)


def _invalid_range_message(range_text: str) -> str:
    return (
        f"Định dạng vùng dữ liệu '{range_text}' không hợp lệ. "
        "Vui lòng dùng định dạng như 'A1:K29'."
    )


def _access_error_message(status: int) -> str:
    return (
        f"Không thể tải dữ liệu (lỗi {status}). Vui lòng kiểm tra lại:\n"
        "1. Link Google Sheet có chính xác không.\n"
        "2. Vùng dữ liệu (vd: A1:K29) có hợp lệ không.\n"
        "3. Quyền truy cập của Sheet đã được đặt là 'Bất kỳ ai có đường liên kết'.\n\n"
        "Mẹo: Để đảm bảo hoạt động, hãy thử 'Tệp' > 'Chia sẻ' > 'Xuất bản lên web'."
    )


def build_request_url(sheet_url: str, range_text: str, *, config: SheetsConfig | None = None) -> str:
    """Validate user input and return the query URL.

    Raises:
        InvalidInputError: If the range text or the sheet link cannot be parsed.
    """

    cfg = config or resolve_sheets_config()
    cell_range = parse_range(range_text)
    if cell_range is None:
        raise InvalidInputError(_invalid_range_message(range_text))
    url = build_query_url(sheet_url, cell_range, extract_gid(sheet_url), base_url=cfg.base_url)
    if url is None:
        raise InvalidInputError(INVALID_URL_MESSAGE)
    return url


def _download(url: str, session: Any, cfg: SheetsConfig) -> str:
    LOGGER.info("Requesting sheet data: %s", url)
    try:
        response = session.get(url, timeout=cfg.timeout_sec, headers={"User-Agent": cfg.user_agent})
    except RequestException as exc:
        LOGGER.warning("Sheet request failed before a response: %s", exc)
        raise TransportError(f"Không thể kết nối tới Google Sheets: {exc}") from exc

    status = response.status_code
    if not 200 <= status < 300:
        LOGGER.warning("Sheet request returned HTTP %s", status)
        if status in ACCESS_ERROR_STATUS:
            raise AccessOrRangeError(_access_error_message(status), status_code=status)
        raise TransportError(f"Không thể tải dữ liệu. Mã lỗi: {status}", status_code=status)
    return response.text


def unwrap_response(body: str) -> Any:
    """Extract and decode the JSON payload from the callback-wrapped body.

    Raises:
        ProtocolError: If the wrapper is missing or the payload is not JSON.
    """

    match = RESPONSE_PATTERN.search(body or "")
    if not match or not match.group(1):
        raise ProtocolError(INVALID_RESPONSE_MESSAGE)
    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        LOGGER.warning("Sheet payload is not valid JSON: %s", exc)
        raise ProtocolError(INVALID_JSON_MESSAGE, syntax=True) from exc


def _raise_for_provider_error(payload: Any) -> None:
    if not isinstance(payload, dict) or payload.get("status") != "error":
        return
    messages = collect_error_messages(payload.get("errors"))
    detail = "\n".join(messages) if messages else UNKNOWN_PROVIDER_ERROR
    raise ProviderError(f"Lỗi từ Google Sheets:\n{detail}")


def load_records(
    sheet_url: str,
    range_text: str,
    *,
    session: Any | None = None,
    config: SheetsConfig | None = None,
) -> List[RoomRecord]:
    """Raising variant of :func:`fetch_records`.

    Returns the (possibly empty) record list or raises a :class:`SheetsError`
    subclass for the failing step; an invalid environment override raises
    :class:`ConfigError`. Nothing is retried.
    """

    cfg = config or resolve_sheets_config()
    url = build_request_url(sheet_url, range_text, config=cfg)
    owns_session = session is None
    http = session or requests.Session()
    try:
        body = _download(url, http, cfg)
    finally:
        if owns_session:
            http.close()

    payload = unwrap_response(body)
    _raise_for_provider_error(payload)
    return extract_records(payload)


def fetch_records(
    sheet_url: str,
    range_text: str,
    *,
    session: Any | None = None,
    config: SheetsConfig | None = None,
) -> FetchResult:
    """Fetch a range and return records or a single user-facing failure.

    Every :class:`SheetsError` is converted at this boundary, and a bad
    endpoint configuration is reported as ``FailureKind.INVALID_INPUT``. An
    empty but well-formed range is reported as ``FailureKind.NO_DATA``.
    """

    try:
        records = load_records(sheet_url, range_text, session=session, config=config)
    except SheetsError as exc:
        LOGGER.info("Sheet retrieval failed (%s): %s", exc.kind.value, exc.message)
        return FetchResult.failed(exc.kind, exc.message, status_code=exc.status_code)
    except ConfigError as exc:
        LOGGER.warning("Sheet endpoint configuration rejected: %s", exc)
        return FetchResult.failed(FailureKind.INVALID_INPUT, f"Cấu hình không hợp lệ: {exc}")

    if not records:
        LOGGER.info("Sheet range yielded no usable rows")
        return FetchResult.failed(FailureKind.NO_DATA, NO_DATA_MESSAGE)

    LOGGER.info("Loaded %s room records", len(records))
    return FetchResult.success(records)


__all__ = [
    "build_request_url",
    "fetch_records",
    "load_records",
    "unwrap_response",
]
