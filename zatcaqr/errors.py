"""Codec error definitions."""
from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorKind(str, enum.Enum):
    MISSING_FIELD = "ERR_MISSING_FIELD"
    FIELD_TOO_LONG = "ERR_FIELD_TOO_LONG"
    INVALID_ENVELOPE = "ERR_INVALID_ENVELOPE"
    TRUNCATED_RECORD = "ERR_TRUNCATED_RECORD"
    INVALID_TIMESTAMP = "ERR_INVALID_TIMESTAMP"
    INVALID_AMOUNT = "ERR_INVALID_AMOUNT"


@dataclass(slots=True)
class QRCodeError(Exception):
    kind: ErrorKind
    message: str
    field: str | None = None
    status_code: int = 400

    @property
    def code(self) -> str:
        return self.kind.value

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


class ValidationError(QRCodeError):
    """Record rejected before encoding."""


class DecodeError(QRCodeError):
    """Envelope could not be turned back into a record."""


def err_missing_field(field: str) -> ValidationError:
    return ValidationError(ErrorKind.MISSING_FIELD, f"missing `{field}`", field=field, status_code=422)


def err_field_too_long(field: str, length: int | None = None) -> ValidationError:
    message = f"`{field}` exceeds the maximum value length"
    if length is not None:
        message = f"{message} ({length} bytes)"
    return ValidationError(ErrorKind.FIELD_TOO_LONG, message, field=field, status_code=422)


def err_invalid_envelope(message: str | None = None) -> DecodeError:
    return DecodeError(ErrorKind.INVALID_ENVELOPE, message or "Envelope is not valid base64")


def err_truncated_record(message: str | None = None) -> DecodeError:
    return DecodeError(ErrorKind.TRUNCATED_RECORD, message or "TLV data ends inside a triplet")


def err_invalid_timestamp(value: str) -> DecodeError:
    return DecodeError(
        ErrorKind.INVALID_TIMESTAMP,
        f"timestamp {value!r} is not in RFC 3339 format",
        field="timestamp",
    )


def err_invalid_amount(field: str, value: str) -> DecodeError:
    return DecodeError(ErrorKind.INVALID_AMOUNT, f"{field} {value!r} is not a decimal number", field=field)
