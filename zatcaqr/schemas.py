"""Pydantic schemas for API contracts."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from .models import InvoiceRecord


class InvoiceFields(BaseModel):
    seller_name: str = Field(default="", description="Seller name, any script")
    seller_tax_registration_number: str = Field(default="", description="VAT registration number")
    timestamp: datetime | None = Field(default=None, description="Invoice issue time; naive values are UTC")
    invoice_total: Decimal = Field(default=Decimal(0), description="Invoice total including VAT")
    total_vat: Decimal = Field(default=Decimal(0), description="VAT total")

    def to_record(self) -> InvoiceRecord:
        return InvoiceRecord(
            seller_name=self.seller_name,
            seller_tax_registration_number=self.seller_tax_registration_number,
            timestamp=self.timestamp,
            invoice_total=self.invoice_total,
            total_vat=self.total_vat,
        )

    @classmethod
    def from_record(cls, record: InvoiceRecord) -> "InvoiceFields":
        return cls(
            seller_name=record.seller_name,
            seller_tax_registration_number=record.seller_tax_registration_number,
            timestamp=record.timestamp,
            invoice_total=record.invoice_total,
            total_vat=record.total_vat,
        )


class EncodeRequest(InvoiceFields):
    pass


class EncodeResponse(BaseModel):
    payload: str = Field(description="Base64 TLV payload for the QR code")


class DecodeRequest(BaseModel):
    payload: str = Field(min_length=1, description="Base64 TLV payload read from a QR code")


class DecodeResponse(InvoiceFields):
    # decoded amounts are not re-validated, so NaN and Infinity pass through
    invoice_total: Decimal = Field(default=Decimal(0), allow_inf_nan=True, description="Invoice total including VAT")
    total_vat: Decimal = Field(default=Decimal(0), allow_inf_nan=True, description="VAT total")


class ErrorResponse(BaseModel):
    code: str
    message: str
    field: str | None = None
