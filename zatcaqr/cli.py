"""Command-line entry point for encoding and decoding invoice QR payloads."""
from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import click

from . import __version__
from .codec import decode, encode
from .errors import QRCodeError
from .formatting import format_amount, format_timestamp, min_amount_length, parse_amount, parse_timestamp
from .logging_conf import configure_logging
from .models import MAX_VALUE_LENGTH, InvoiceRecord
from .renderer import ERROR_CORRECTION_LEVELS, write_qr_png


class TimestampParam(click.ParamType):
    name = "timestamp"

    def convert(self, value, param, ctx) -> datetime:
        if isinstance(value, datetime):
            return value
        try:
            return parse_timestamp(value)
        except ValueError:
            self.fail(f"{value!r} is not an RFC 3339 timestamp", param, ctx)


class AmountParam(click.ParamType):
    name = "amount"

    def convert(self, value, param, ctx) -> Decimal:
        if isinstance(value, Decimal):
            return value
        try:
            return parse_amount(value)
        except ValueError:
            self.fail(f"{value!r} is not a decimal amount", param, ctx)


def _amount_text(value: Decimal) -> str:
    if min_amount_length(value) > MAX_VALUE_LENGTH:
        return str(value)
    return format_amount(value)


@click.group()
@click.version_option(version=__version__, prog_name="zatcaqr")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
def cli(verbose: bool, log_json: bool) -> None:
    """zatcaqr - ZATCA invoice QR payload codec."""
    configure_logging(level="DEBUG" if verbose else "WARNING", json_logs=log_json)


@cli.command("encode")
@click.option("--seller-name", required=True, help="Seller name.")
@click.option("--tax-number", "tax_number", required=True, help="Seller VAT registration number.")
@click.option("--timestamp", type=TimestampParam(), required=True, help="RFC 3339 issue time, e.g. 2022-04-25T15:30:00Z.")
@click.option("--invoice-total", type=AmountParam(), required=True, help="Invoice total including VAT.")
@click.option("--total-vat", type=AmountParam(), required=True, help="VAT total.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also write a QR PNG here.")
@click.option(
    "--error-correction",
    type=click.Choice(sorted(ERROR_CORRECTION_LEVELS), case_sensitive=False),
    default=None,
    help="QR error-correction level for --output.",
)
@click.option("--size", type=click.IntRange(21, 4096), default=None, help="PNG edge in pixels for --output.")
def encode_cmd(
    seller_name: str,
    tax_number: str,
    timestamp: datetime,
    invoice_total: Decimal,
    total_vat: Decimal,
    output: Path | None,
    error_correction: str | None,
    size: int | None,
) -> None:
    """Print the base64 TLV payload for an invoice."""
    record = InvoiceRecord(
        seller_name=seller_name,
        seller_tax_registration_number=tax_number,
        timestamp=timestamp,
        invoice_total=invoice_total,
        total_vat=total_vat,
    )
    try:
        payload = encode(record)
    except QRCodeError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(payload)
    if output is not None:
        write_qr_png(payload, output, error_correction=error_correction, size=size)
        click.echo(f"wrote {output}", err=True)


@cli.command("decode")
@click.argument("payload")
@click.option("--json", "json_output", is_flag=True, help="Print fields as JSON.")
def decode_cmd(payload: str, json_output: bool) -> None:
    """Print the invoice fields carried by a base64 TLV payload."""
    try:
        record = decode(payload)
    except QRCodeError as exc:
        raise click.ClickException(str(exc)) from exc

    fields = {
        "seller_name": record.seller_name,
        "seller_tax_registration_number": record.seller_tax_registration_number,
        "timestamp": format_timestamp(record.timestamp) if record.timestamp else None,
        "invoice_total": _amount_text(record.invoice_total),
        "total_vat": _amount_text(record.total_vat),
    }
    if json_output:
        click.echo(json.dumps(fields, ensure_ascii=False))
        return
    for name, value in fields.items():
        click.echo(f"{name}: {value if value is not None else '-'}")
