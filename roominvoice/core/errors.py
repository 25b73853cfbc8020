"""Custom exceptions used across roominvoice."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Outcome categories reported by the sheet retrieval pipeline."""

    INVALID_INPUT = "invalid_input"
    ACCESS_OR_RANGE = "access_or_range"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    PROVIDER = "provider"
    EXTRACTION = "extraction"
    NO_DATA = "no_data"


class RoomInvoiceError(Exception):
    """Base error for the application."""


class ConfigError(RoomInvoiceError):
    """Configuration related error."""


class SheetsError(RoomInvoiceError):
    """Base error raised while turning a sheet range into room records."""

    kind: FailureKind = FailureKind.TRANSPORT

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidInputError(SheetsError):
    """Range text or sheet URL typed by the user cannot be parsed."""

    kind = FailureKind.INVALID_INPUT


class AccessOrRangeError(SheetsError):
    """Provider rejected the request (HTTP 400/404): sharing or range problem."""

    kind = FailureKind.ACCESS_OR_RANGE


class TransportError(SheetsError):
    """Any other HTTP or connection failure."""

    kind = FailureKind.TRANSPORT


class ProtocolError(SheetsError):
    """Response envelope or JSON payload is malformed."""

    kind = FailureKind.PROTOCOL

    def __init__(self, message: str, *, syntax: bool = False) -> None:
        super().__init__(message)
        self.syntax = syntax


class ProviderError(SheetsError):
    """Provider answered with an explicit error status."""

    kind = FailureKind.PROVIDER


class ExtractionError(SheetsError):
    """Table could not be mapped onto the room record schema."""

    kind = FailureKind.EXTRACTION
