"""Unit tests for the property search API route.

Tests for:
- GET /api/properties - Property search with optional stay window
"""

import datetime as dt
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from starlette.status import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from rentals.models import PropertyCandidate, ReservationRecord
from rentals.services.property_search import PropertySearchService
from rentals.services.zoho_client import ZohoAuthError
from rentals_api.dependencies import get_property_search_service
from rentals_api.main import app


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock Zoho client with two single-room properties."""
    client = MagicMock()
    client.list_properties.return_value = [
        PropertyCandidate(id="P1", total_rooms=1, title="Piso Centro", location="Madrid"),
        PropertyCandidate(id="P2", total_rooms=1, title="Estudio Playa", property_type="Estudio"),
    ]
    client.fetch_overlapping_reservations.return_value = [
        ReservationRecord(
            unit_id="R1",
            check_in=dt.date(2025, 3, 2),
            check_out=dt.date(2025, 3, 3),
            status="Confirmada",
        )
    ]
    client.get_room_property_ids.return_value = {"R1": "P1"}
    return client


@pytest.fixture
def client(mock_client: MagicMock) -> Generator[TestClient, None, None]:
    """Create test client with the search service bound to the mock CRM."""
    app.dependency_overrides[get_property_search_service] = lambda: PropertySearchService(
        client=mock_client
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestSearchProperties:
    """Tests for GET /api/properties."""

    def test_browse_without_dates(self, client: TestClient) -> None:
        response = client.get("/api/properties")
        assert response.status_code == HTTP_200_OK

        data = response.json()
        assert [p["id"] for p in data["properties"]] == ["P1", "P2"]
        assert data["available_types"] == ["Apartamento", "Estudio"]
        assert data["reservations_checked"] is True
        first = data["properties"][0]
        assert first["available_dates"] == []
        assert first["unavailable_dates"] == []
        assert first["available_nights"] == 0
        assert first["is_fully_available"] is True

    def test_excludes_fully_booked(self, client: TestClient) -> None:
        response = client.get(
            "/api/properties", params={"check_in": "2025-03-01", "check_out": "2025-03-05"}
        )
        assert response.status_code == HTTP_200_OK

        properties = response.json()["properties"]
        assert [p["id"] for p in properties] == ["P2"]
        assert properties[0]["available_dates"] == [
            "2025-03-01",
            "2025-03-02",
            "2025-03-03",
            "2025-03-04",
        ]
        assert properties[0]["available_nights"] == 4

    def test_filters_by_type(self, client: TestClient) -> None:
        response = client.get("/api/properties", params={"property_type": "estudio"})
        assert response.status_code == HTTP_200_OK
        assert [p["id"] for p in response.json()["properties"]] == ["P2"]

    def test_invalid_range_returns_400(self, client: TestClient) -> None:
        response = client.get(
            "/api/properties", params={"check_in": "2025-03-05", "check_out": "2025-03-01"}
        )
        assert response.status_code == HTTP_400_BAD_REQUEST

        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "ERR_001"
        assert data["details"] == {"check_in": "2025-03-05", "check_out": "2025-03-01"}

    def test_single_date_returns_400(self, client: TestClient) -> None:
        response = client.get("/api/properties", params={"check_in": "2025-03-05"})
        assert response.status_code == HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "ERR_002"

    def test_malformed_date_returns_422(self, client: TestClient) -> None:
        response = client.get(
            "/api/properties", params={"check_in": "2025-13-40", "check_out": "2025-03-01"}
        )
        assert response.status_code == 422

    def test_crm_auth_failure_returns_502(
        self, client: TestClient, mock_client: MagicMock
    ) -> None:
        mock_client.list_properties.side_effect = ZohoAuthError("zoho_auth_failed: 401")

        response = client.get("/api/properties")
        assert response.status_code == HTTP_502_BAD_GATEWAY
        assert response.json()["error_code"] == "ERR_CRM_002"


class TestMissingConfiguration:
    """Tests for deployments without CRM credentials."""

    def test_missing_token_returns_500(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ZOHO_ACCESS_TOKEN", raising=False)
        monkeypatch.delenv("ZOHO_ACCESS_TOKEN_PARAMETER", raising=False)

        response = TestClient(app).get("/api/properties")

        assert response.status_code == HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error_code"] == "ERR_CONFIG_001"
