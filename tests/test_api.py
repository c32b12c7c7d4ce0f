"""Tests for the HTTP service."""

import base64

import pytest
from fastapi.testclient import TestClient

from tests.conftest import ARABIC_PAYLOAD, ARABIC_SELLER_NAME, BOBS_RECORDS_PAYLOAD
from zatcaqr.api import app
from zatcaqr.config import settings

BOBS_RECORDS_JSON = {
    "seller_name": "Bobs Records",
    "seller_tax_registration_number": "310122393500003",
    "timestamp": "2022-04-25T15:30:00Z",
    "invoice_total": "1000",
    "total_vat": "150",
}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def headers() -> dict[str, str]:
    return {"X-API-Key": settings.api_key}


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requires_api_key(client: TestClient) -> None:
    response = client.post("/v1/qr/encode", json=BOBS_RECORDS_JSON, headers={"X-API-Key": "wrong"})
    assert response.status_code == 401


class TestEncodeEndpoint:
    def test_encodes(self, client: TestClient, headers: dict[str, str]) -> None:
        response = client.post("/v1/qr/encode", json=BOBS_RECORDS_JSON, headers=headers)
        assert response.status_code == 200
        assert response.json() == {"payload": BOBS_RECORDS_PAYLOAD}

    def test_numeric_amounts(self, client: TestClient, headers: dict[str, str]) -> None:
        body = {**BOBS_RECORDS_JSON, "invoice_total": 1000, "total_vat": 150.0}
        response = client.post("/v1/qr/encode", json=body, headers=headers)
        assert response.json()["payload"] == BOBS_RECORDS_PAYLOAD

    def test_missing_field(self, client: TestClient, headers: dict[str, str]) -> None:
        body = {key: value for key, value in BOBS_RECORDS_JSON.items() if key != "timestamp"}
        response = client.post("/v1/qr/encode", json=body, headers=headers)
        assert response.status_code == 422
        assert response.json() == {
            "code": "ERR_MISSING_FIELD",
            "message": "missing `timestamp`",
            "field": "timestamp",
        }

    def test_field_too_long(self, client: TestClient, headers: dict[str, str]) -> None:
        body = {**BOBS_RECORDS_JSON, "seller_name": "ع" * 200}
        response = client.post("/v1/qr/encode", json=body, headers=headers)
        assert response.status_code == 422
        assert response.json()["code"] == "ERR_FIELD_TOO_LONG"


class TestDecodeEndpoint:
    def test_decodes(self, client: TestClient, headers: dict[str, str]) -> None:
        response = client.post("/v1/qr/decode", json={"payload": ARABIC_PAYLOAD}, headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["seller_name"] == ARABIC_SELLER_NAME
        assert body["seller_tax_registration_number"] == "310122393500003"
        assert body["timestamp"] == "2022-04-25T15:30:00Z"
        assert body["invoice_total"] == "1000.00"
        assert body["total_vat"] == "150.00"

    def test_invalid_envelope(self, client: TestClient, headers: dict[str, str]) -> None:
        response = client.post("/v1/qr/decode", json={"payload": "@@@"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["code"] == "ERR_INVALID_ENVELOPE"


def test_metrics_count_codec_calls(client: TestClient, headers: dict[str, str]) -> None:
    client.post("/v1/qr/encode", json=BOBS_RECORDS_JSON, headers=headers)
    response = client.get("/metrics")
    assert response.status_code == 200
    assert 'zatcaqr_codec_operations_total{operation="encode",outcome="ok"}' in response.text
    assert "zatcaqr_http_requests_total" in response.text


@pytest.mark.parametrize(("text", "expected"), [(b"NaN", "NaN"), (b"Infinity", "Infinity")])
def test_decode_non_finite_amount(client: TestClient, headers: dict[str, str], text: bytes, expected: str) -> None:
    raw = bytes((4, len(text))) + text
    response = client.post("/v1/qr/decode", json={"payload": base64.b64encode(raw).decode("ascii")}, headers=headers)
    assert response.status_code == 200
    assert response.json()["invoice_total"] == expected


def test_decode_out_of_range_timestamp(client: TestClient, headers: dict[str, str]) -> None:
    text = b"0001-01-01T00:00:00+01:00"
    raw = bytes((3, len(text))) + text
    response = client.post("/v1/qr/decode", json={"payload": base64.b64encode(raw).decode("ascii")}, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "ERR_INVALID_TIMESTAMP"


def test_encode_huge_amount(client: TestClient, headers: dict[str, str]) -> None:
    body = {**BOBS_RECORDS_JSON, "total_vat": "1E+200000000"}
    response = client.post("/v1/qr/encode", json=body, headers=headers)
    assert response.status_code == 422
    assert response.json()["field"] == "total_vat"
