"""Tests for the lookup API router."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from infofinder.api.app import create_app
from infofinder.api.lookup import get_lookup_service
from infofinder.lookup.errors import NOT_FOUND_MESSAGE, EmptyLookupError, LookupHTTPError, LookupTransportError
from infofinder.lookup.registry import CategoryId
from infofinder.lookup.service import LookupService
from infofinder.settings import get_settings


class _StubClient:
    def __init__(self, responses: dict[CategoryId, object]) -> None:
        self.responses = responses
        self.calls: list[tuple[CategoryId, str]] = []

    def fetch(self, category_id, identifier):  # type: ignore[override]
        category = CategoryId(category_id)
        self.calls.append((category, identifier))
        response = self.responses[category]
        if isinstance(response, Exception):
            raise response
        return response


class _NullObservability:
    def emit_event(self, event: str, **fields: object) -> None:
        pass

    def increment(self, metric: str, *, value: float = 1.0, tags=None) -> None:
        pass

    def record_timing(self, metric: str, value_ms: float, *, tags=None) -> None:
        pass


@pytest.fixture(name="stub_client")
def _stub_client() -> _StubClient:
    return _StubClient(
        {
            CategoryId.MOBILE: {"name": "Jane Doe", "id": "490012345678", "address": "12!MG Road!Pune"},
            CategoryId.NATIONAL_ID: [{"name": "Jane Doe", "dob": "1990-01-01"}],
        }
    )


@pytest.fixture(name="client")
def _client(stub_client: _StubClient):
    service = LookupService(client=stub_client, settings=get_settings(), observability=_NullObservability())  # type: ignore[arg-type]
    app = create_app()
    app.dependency_overrides[get_lookup_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_categories_lists_every_category(client):
    response = client.get("/lookup/categories")

    assert response.status_code == 200
    body = response.json()
    assert [entry["id"] for entry in body] == [category.value for category in CategoryId]
    assert body[0]["max_length"] == 10
    assert body[4]["hint"] == "Enter 11-character IFSC code"


def test_search_returns_presentation_model(client, stub_client):
    response = client.get("/lookup/search/mobile", params={"value": " 9876543210 "})

    assert response.status_code == 200
    body = response.json()
    assert stub_client.calls == [(CategoryId.MOBILE, "9876543210")]
    assert body["chained_id"] == "490012345678"
    assert body["location_hint"] == "12, MG Road, Pune"
    assert [section["title"] for section in body["sections"]] == ["Personal Information", "Location Details"]


def test_search_rejects_invalid_input(client, stub_client):
    response = client.get("/lookup/search/mobile", params={"value": "abc"})

    assert response.status_code == 400
    assert response.json()["detail"] == {"reason": "pattern-mismatch", "message": "Please enter a valid mobile number"}
    assert stub_client.calls == []


def test_search_unknown_category(client):
    response = client.get("/lookup/search/passport", params={"value": "X"})
    assert response.status_code == 404


@pytest.mark.parametrize("error", [LookupHTTPError(500), EmptyLookupError()])
def test_search_not_found_errors(client, stub_client, error):
    stub_client.responses[CategoryId.MOBILE] = error

    response = client.get("/lookup/search/mobile", params={"value": "9876543210"})

    assert response.status_code == 404
    assert response.json()["detail"] == NOT_FOUND_MESSAGE


def test_search_transport_error_shows_transport_message(client, stub_client):
    stub_client.responses[CategoryId.MOBILE] = LookupTransportError("upstream timed out")

    response = client.get("/lookup/search/mobile", params={"value": "9876543210"})

    assert response.status_code == 502
    assert response.json()["detail"] == "upstream timed out"


def test_chained_returns_aadhaar_section(client, stub_client):
    response = client.get("/lookup/chained/490012345678")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Aadhaar Details"
    assert body["items"][0] == {"label": "Aadhaar Number", "value": "490012345678"}
    assert stub_client.calls == [(CategoryId.NATIONAL_ID, "490012345678")]


def test_chained_validates_identifier(client, stub_client):
    response = client.get("/lookup/chained/12345")

    assert response.status_code == 400
    assert stub_client.calls == []
