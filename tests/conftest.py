"""Shared pytest fixtures for zatcaqr tests."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from click.testing import CliRunner

from zatcaqr.models import InvoiceRecord

BOBS_RECORDS_PAYLOAD = (
    "AQxCb2JzIFJlY29yZHMCDzMxMDEyMjM5MzUwMDAwMwMUMjAyMi0wNC0yNVQxNTozMDowMFoEBzEwMDAuMDAFBjE1MC4wMA=="
)
ARABIC_SELLER_NAME = "الجواهري العربي"
ARABIC_PAYLOAD = (
    "AR3Yp9mE2KzZiNin2YfYsdmKINin2YTYudix2KjZigIPMzEwMTIyMzkzNTAwMDAzAxQyMDIyLTA0LTI1VDE1OjMwOjAwWgQHMTAwMC4wMAUGMTUwLjAw"
)


def make_record(**overrides) -> InvoiceRecord:
    fields = {
        "seller_name": "Bobs Records",
        "seller_tax_registration_number": "310122393500003",
        "timestamp": datetime(2022, 4, 25, 15, 30, 0, tzinfo=timezone.utc),
        "invoice_total": Decimal("1000"),
        "total_vat": Decimal("150"),
    }
    fields.update(overrides)
    return InvoiceRecord(**fields)


@pytest.fixture
def record() -> InvoiceRecord:
    """The Bobs Records invoice used throughout the tests."""
    return make_record()


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
