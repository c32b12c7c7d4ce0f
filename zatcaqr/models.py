"""Invoice record and TLV tag definitions."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

# The length byte caps every value at 255 bytes.
MAX_VALUE_LENGTH = 255


class Tag(enum.IntEnum):
    SELLER_NAME = 1
    SELLER_TAX_REGISTRATION_NUMBER = 2
    TIMESTAMP = 3
    INVOICE_TOTAL = 4
    TOTAL_VAT = 5

    @property
    def field_name(self) -> str:
        return self.name.lower()


@dataclass(slots=True)
class InvoiceRecord:
    """Fields carried by a simplified-invoice QR code."""

    seller_name: str = ""
    seller_tax_registration_number: str = ""
    timestamp: datetime | None = None
    invoice_total: Decimal | int | float = Decimal(0)
    total_vat: Decimal | int | float = Decimal(0)
