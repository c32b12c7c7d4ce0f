"""Build and parse byte-oriented TLV triplets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import err_field_too_long, err_truncated_record
from .models import MAX_VALUE_LENGTH


@dataclass(frozen=True)
class TLVItem:
    tag: int
    value: bytes

    def serialize(self) -> bytes:
        if not 0 <= self.tag <= 0xFF:
            raise ValueError(f"TLV tag {self.tag} does not fit in one byte")
        if len(self.value) > MAX_VALUE_LENGTH:
            raise err_field_too_long(f"tag {self.tag}", len(self.value))
        return bytes((self.tag, len(self.value))) + self.value

    def text(self) -> str:
        return self.value.decode("utf-8")


def build_tlv(items: Iterable[TLVItem]) -> bytes:
    """Serialize TLV items into one byte string, preserving their order."""

    return b"".join(item.serialize() for item in items)


def parse_tlv(data: bytes) -> Iterator[TLVItem]:
    """Parse a byte string into TLV items until it is exhausted."""

    idx = 0
    total = len(data)
    while idx < total:
        if idx + 2 > total:
            raise err_truncated_record(f"TLV header at offset {idx} is missing its length byte")
        tag = data[idx]
        length = data[idx + 1]
        value_start = idx + 2
        value_end = value_start + length
        if value_end > total:
            raise err_truncated_record(
                f"tag {tag} claims {length} bytes but only {total - value_start} remain"
            )
        yield TLVItem(tag=tag, value=data[value_start:value_end])
        idx = value_end
