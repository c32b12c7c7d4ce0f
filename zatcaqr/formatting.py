"""Wire-form formatting and parsing for typed invoice fields."""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

ZERO_TIMESTAMP = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def to_utc(value: datetime) -> datetime:
    """Normalize to UTC, treating naive datetimes as already UTC.

    Raises ``OverflowError`` when the UTC instant is outside the datetime range.
    """

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_zero_timestamp(value: datetime) -> bool:
    try:
        return to_utc(value) == ZERO_TIMESTAMP
    except OverflowError:
        return False


def _utc_fields(value: datetime) -> tuple[int, int, int, int, int, int]:
    try:
        ts = to_utc(value)
    except OverflowError:
        # The UTC instant is one day past either end of the datetime range:
        # 0000-12-31 for positive offsets, 10000-01-01 for negative ones.
        naive = value.replace(tzinfo=None)
        offset = value.utcoffset()
        if offset > timedelta(0):
            shifted = naive + (timedelta(days=1) - offset)
            return 0, 12, 31, shifted.hour, shifted.minute, shifted.second
        shifted = naive - (timedelta(days=1) + offset)
        return 10000, 1, 1, shifted.hour, shifted.minute, shifted.second
    return ts.year, ts.month, ts.day, ts.hour, ts.minute, ts.second


def format_timestamp(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC, dropping sub-second precision."""

    year, month, day, hour, minute, second = _utc_fields(value)
    return f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp and normalize it to UTC.

    Raises ``ValueError`` when the text is not RFC 3339 or its UTC instant
    cannot be represented.
    """

    match = _RFC3339_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction, offset = match.group(7), match.group(8)
    # sub-microsecond digits are truncated
    microsecond = int(fraction[1:7].ljust(6, "0")) if fraction else 0
    if offset in {"Z", "z"}:
        tz = timezone.utc
    else:
        delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
        tz = timezone(-delta if offset[0] == "-" else delta)
    try:
        parsed = datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
        return parsed.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range: {text!r}") from exc


def as_decimal(value: Decimal | int | float) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # Decimal(float) is exact, so rounding matches the binary value.
    return Decimal(value)


def min_amount_length(value: Decimal | int | float) -> int:
    """Lower bound on ``len(format_amount(value))``, computed without formatting."""

    amount = as_decimal(value)
    if not amount.is_finite():
        return len(str(amount))
    integer_digits = max(amount.adjusted() + 1, 1)
    return integer_digits + len(".00") + (1 if amount.is_signed() else 0)


def format_amount(value: Decimal | int | float) -> str:
    """Format an amount with exactly two decimal places, rounding half-even."""

    return format(as_decimal(value), ".2f")


def parse_amount(text: str) -> Decimal:
    """Parse a decimal amount; raises ``ValueError`` when malformed."""

    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"not a decimal number: {text!r}")
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal number: {text!r}") from exc
