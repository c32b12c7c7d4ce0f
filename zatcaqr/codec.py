"""Invoice QR payload encoder and decoder.

The payload is five TLV triplets (tag byte, length byte, UTF-8 value) in tag
order, wrapped in standard base64. Decoding dispatches on the tag, so triplet
order is not significant there; unknown tags are skipped and a repeated tag
overwrites the value read earlier.
"""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Callable

from .errors import err_invalid_amount, err_invalid_envelope, err_invalid_timestamp
from .formatting import parse_amount, parse_timestamp
from .models import InvoiceRecord, Tag
from .tlv import TLVItem, build_tlv, parse_tlv
from .validation import validate, wire_values

logger = logging.getLogger("zatcaqr.codec")


def encode(record: InvoiceRecord) -> str:
    """Validate ``record`` and return its base64 TLV payload."""

    validate(record)
    items = [TLVItem(tag=tag, value=value.encode("utf-8")) for tag, value in wire_values(record).items()]
    raw = build_tlv(items)
    logger.debug("encoded invoice record", extra={"tlv_bytes": len(raw)})
    return base64.b64encode(raw).decode("ascii")


def _set_text(record: InvoiceRecord, tag: Tag, item: TLVItem) -> None:
    try:
        text = item.text()
    except UnicodeDecodeError as exc:
        raise err_invalid_envelope(f"{tag.field_name} is not valid UTF-8") from exc
    setattr(record, tag.field_name, text)


def _set_timestamp(record: InvoiceRecord, tag: Tag, item: TLVItem) -> None:
    text = item.value.decode("utf-8", errors="replace")
    try:
        record.timestamp = parse_timestamp(text)
    except ValueError as exc:
        raise err_invalid_timestamp(text) from exc


def _set_amount(record: InvoiceRecord, tag: Tag, item: TLVItem) -> None:
    text = item.value.decode("utf-8", errors="replace")
    try:
        setattr(record, tag.field_name, parse_amount(text))
    except ValueError as exc:
        raise err_invalid_amount(tag.field_name, text) from exc


_SETTERS: dict[Tag, Callable[[InvoiceRecord, Tag, TLVItem], None]] = {
    Tag.SELLER_NAME: _set_text,
    Tag.SELLER_TAX_REGISTRATION_NUMBER: _set_text,
    Tag.TIMESTAMP: _set_timestamp,
    Tag.INVOICE_TOTAL: _set_amount,
    Tag.TOTAL_VAT: _set_amount,
}


def _b64decode(envelope: str | bytes) -> bytes:
    try:
        return base64.b64decode(envelope, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise err_invalid_envelope(f"Envelope is not valid base64: {exc}") from exc


def decode(envelope: str | bytes) -> InvoiceRecord:
    """Decode a base64 TLV payload into an ``InvoiceRecord``.

    The result is not validated; fields whose tags are absent keep their
    defaults.
    """

    record = InvoiceRecord()
    for item in parse_tlv(_b64decode(envelope)):
        try:
            tag = Tag(item.tag)
        except ValueError:
            logger.debug("skipping unknown tag", extra={"tag": item.tag, "length": len(item.value)})
            continue
        _SETTERS[tag](record, tag, item)
    return record
