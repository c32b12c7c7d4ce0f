"""ZATCA invoice QR payload codec."""
from __future__ import annotations

from .codec import decode, encode
from .errors import DecodeError, ErrorKind, QRCodeError, ValidationError
from .models import InvoiceRecord, Tag
from .validation import validate

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "ErrorKind",
    "InvoiceRecord",
    "QRCodeError",
    "Tag",
    "ValidationError",
    "decode",
    "encode",
    "validate",
]
