"""Pre-encoding checks for invoice records."""
from __future__ import annotations

import logging

from .errors import err_field_too_long, err_missing_field
from .formatting import format_amount, format_timestamp, is_zero_timestamp, min_amount_length
from .models import MAX_VALUE_LENGTH, InvoiceRecord, Tag

logger = logging.getLogger("zatcaqr.validation")

_AMOUNT_TAGS = frozenset({Tag.INVOICE_TOTAL, Tag.TOTAL_VAT})


def wire_value(record: InvoiceRecord, tag: Tag) -> str:
    """Return the string form a field takes on the wire."""

    value = getattr(record, tag.field_name)
    if tag is Tag.TIMESTAMP:
        return format_timestamp(value)
    if tag in _AMOUNT_TAGS:
        return format_amount(value)
    return value


def wire_values(record: InvoiceRecord) -> dict[Tag, str]:
    """Return the string form of every field, keyed by tag in wire order."""

    return {tag: wire_value(record, tag) for tag in Tag}


def validate(record: InvoiceRecord) -> None:
    """Raise ``ValidationError`` on the first missing or over-long field."""

    if not record.seller_name:
        raise err_missing_field(Tag.SELLER_NAME.field_name)
    if not record.seller_tax_registration_number:
        raise err_missing_field(Tag.SELLER_TAX_REGISTRATION_NUMBER.field_name)
    if record.timestamp is None or is_zero_timestamp(record.timestamp):
        raise err_missing_field(Tag.TIMESTAMP.field_name)
    if record.invoice_total == 0:
        raise err_missing_field(Tag.INVOICE_TOTAL.field_name)
    if record.total_vat == 0:
        raise err_missing_field(Tag.TOTAL_VAT.field_name)

    for tag in Tag:
        if tag in _AMOUNT_TAGS:
            # reject huge magnitudes before formatting them digit by digit
            floor = min_amount_length(getattr(record, tag.field_name))
            if floor > MAX_VALUE_LENGTH:
                logger.debug("field too long", extra={"field": tag.field_name, "length": floor})
                raise err_field_too_long(tag.field_name)
        length = len(wire_value(record, tag).encode("utf-8"))
        if length > MAX_VALUE_LENGTH:
            logger.debug("field too long", extra={"field": tag.field_name, "length": length})
            raise err_field_too_long(tag.field_name, length)
