"""Typer based command line entry points for roominvoice."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
import yaml

from roominvoice.core.errors import FailureKind, RoomInvoiceError
from roominvoice.core.logger import get_logger
from roominvoice.core.profiles import (
    UserSettings,
    load_settings,
    save_settings,
    settings_path,
    update_settings,
)
from roominvoice.services.drafting import generate_invoice_content
from roominvoice.services.invoice import (
    PaymentSettings,
    build_invoice,
    export_rooms,
    render_invoice_sheet,
    render_plain_text,
    render_room_table,
)
from roominvoice.services.sheets import fetch_records
from roominvoice.services.sheets.models import FetchFailure, RoomRecord

EXIT_FAILURE = 1
EXIT_NO_DATA = 3

app = typer.Typer(help="Generate boarding-house rent invoices from a Google Sheet.")
settings_app = typer.Typer(name="settings", help="Inspect or reset stored settings.")
app.add_typer(settings_app, name="settings")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    try:
        get_logger(level=log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def _sheet_url_option():
    return typer.Option(None, "--sheet-url", help="Google Sheet link (stored for next time).")


def _range_option():
    return typer.Option(None, "--range", help="Cell range such as A1:K29 (stored for next time).")


def _handle_error(exc: Exception) -> None:
    get_logger().error("roominvoice command failed: %s", exc, exc_info=True)
    typer.secho(f"Lỗi: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=EXIT_FAILURE)


def _report_failure(failure: FetchFailure) -> None:
    if failure.kind == FailureKind.NO_DATA:
        typer.secho(failure.message, fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=EXIT_NO_DATA)
    get_logger().warning("Sheet retrieval failed: kind=%s status=%s", failure.kind.value, failure.status_code)
    typer.secho(failure.message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=EXIT_FAILURE)


def _remember(**overrides: Optional[str]) -> UserSettings:
    settings = update_settings(load_settings(), overrides)
    if any(value is not None for value in overrides.values()):
        save_settings(settings)
    return settings


def _load_rooms(settings: UserSettings) -> List[RoomRecord]:
    result = fetch_records(settings.sheet_url, settings.range)
    if result.failure is not None:
        _report_failure(result.failure)
    return result.records


def _payment(settings: UserSettings) -> PaymentSettings:
    return PaymentSettings(
        bank_name=settings.bank_name,
        account_number=settings.account_number,
        account_name=settings.account_name,
        payment_note=settings.payment_note,
    )


def _select_room(records: List[RoomRecord], room: Optional[str], index: Optional[int]) -> RoomRecord:
    if index is not None:
        if not 1 <= index <= len(records):
            raise typer.BadParameter(f"index must be between 1 and {len(records)}")
        return records[index - 1]
    if room is None:
        raise typer.BadParameter("pass --room or --index to choose a room")
    wanted = room.strip().casefold()
    for record in records:
        if record.room_name.strip().casefold() == wanted:
            return record
    raise typer.BadParameter(f"room not found: {room}")


@app.command("rooms")
def cmd_rooms(
    sheet_url: Optional[str] = _sheet_url_option(),
    range_text: Optional[str] = _range_option(),
    export: Optional[Path] = typer.Option(None, "--export", help="Write the table to .csv or .xlsx"),
) -> None:
    """Fetch the sheet range and print the room table."""

    try:
        settings = _remember(sheet_url=sheet_url, range=range_text)
        records = _load_rooms(settings)
    except RoomInvoiceError as exc:
        _handle_error(exc)
    typer.echo(render_room_table(records))
    if export is not None:
        try:
            written = export_rooms(records, export)
        except (OSError, ValueError) as exc:
            _handle_error(exc)
        typer.echo(f"Exported: {written}")


@app.command("invoice")
def cmd_invoice(
    room: Optional[str] = typer.Option(None, "--room", help="Room name as written in the sheet"),
    index: Optional[int] = typer.Option(None, "--index", help="1-based row number from the rooms table"),
    plain: bool = typer.Option(False, "--plain", help="Print the short copyable text instead of the sheet"),
    out: Optional[Path] = typer.Option(None, "--out", help="Also write the invoice text to this file"),
    sheet_url: Optional[str] = _sheet_url_option(),
    range_text: Optional[str] = _range_option(),
    bank_name: Optional[str] = typer.Option(None, "--bank-name", help="Bank name"),
    account_number: Optional[str] = typer.Option(None, "--account-number", help="Account number"),
    account_name: Optional[str] = typer.Option(None, "--account-name", help="Account holder"),
    payment_note: Optional[str] = typer.Option(None, "--payment-note", help="Transfer note, {thang} = month"),
) -> None:
    """Render the invoice for one room."""

    try:
        settings = _remember(
            sheet_url=sheet_url,
            range=range_text,
            bank_name=bank_name,
            account_number=account_number,
            account_name=account_name,
            payment_note=payment_note,
        )
        records = _load_rooms(settings)
    except RoomInvoiceError as exc:
        _handle_error(exc)
    record = _select_room(records, room, index)
    invoice = build_invoice(record, _payment(settings))
    text = render_plain_text(invoice) if plain else render_invoice_sheet(invoice)
    typer.echo(text)
    if out is not None:
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(text + "\n", encoding="utf-8")
        except OSError as exc:
            _handle_error(exc)
        get_logger().info("Invoice for room %s written to %s", record.room_name, out)


@app.command("draft")
def cmd_draft(
    room: Optional[str] = typer.Option(None, "--room", help="Room name as written in the sheet"),
    index: Optional[int] = typer.Option(None, "--index", help="1-based row number from the rooms table"),
    sheet_url: Optional[str] = _sheet_url_option(),
    range_text: Optional[str] = _range_option(),
) -> None:
    """Ask the AI model to draft a friendly invoice message for one room."""

    try:
        settings = _remember(sheet_url=sheet_url, range=range_text)
        records = _load_rooms(settings)
    except RoomInvoiceError as exc:
        _handle_error(exc)
    record = _select_room(records, room, index)
    typer.echo(generate_invoice_content(record, _payment(settings)))


@settings_app.command("show")
def cmd_settings_show() -> None:
    """Print the stored settings."""

    typer.echo(f"# {settings_path()}")
    typer.echo(yaml.safe_dump(load_settings().model_dump(), allow_unicode=True, sort_keys=False).rstrip())


@settings_app.command("reset")
def cmd_settings_reset() -> None:
    """Restore the default settings."""

    try:
        written = save_settings(UserSettings())
    except RoomInvoiceError as exc:
        _handle_error(exc)
    typer.echo(f"Settings reset: {written}")


if __name__ == "__main__":
    app()
