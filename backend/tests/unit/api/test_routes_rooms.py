"""Unit tests for the room and property type API routes.

Tests for:
- GET /api/rooms - Room listing by property or room id
- GET /api/property-types - Default property types
"""

from collections.abc import Generator
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette.status import HTTP_200_OK, HTTP_502_BAD_GATEWAY

from rentals.config import ZohoSettings
from rentals.models import RoomListing
from rentals.services.room_catalog import RoomCatalogService
from rentals.services.zoho_client import ZohoClient, ZohoClientError
from rentals_api.dependencies import get_room_catalog_service
from rentals_api.main import app


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock Zoho client with rooms of two properties and one orphan room."""
    client = MagicMock()
    client.list_rooms.return_value = [
        RoomListing(id="R1", property_id="P1", property_slug="piso-centro"),
        RoomListing(id="R2", property_id="P2", property_slug="estudio-playa"),
        RoomListing(id="R3"),
    ]
    return client


@pytest.fixture
def client(mock_client: MagicMock) -> Generator[TestClient, None, None]:
    """Create test client with the room service bound to the mock CRM."""
    app.dependency_overrides[get_room_catalog_service] = lambda: RoomCatalogService(
        client=mock_client
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestListRooms:
    """Tests for GET /api/rooms."""

    def test_lists_rooms_with_a_property(self, client: TestClient) -> None:
        response = client.get("/api/rooms")
        assert response.status_code == HTTP_200_OK

        assert [r["id"] for r in response.json()["rooms"]] == ["R1", "R2"]

    def test_filters_by_property_id(self, client: TestClient, mock_client: MagicMock) -> None:
        response = client.get("/api/rooms", params={"propertyId": "P2"})
        assert response.status_code == HTTP_200_OK

        assert [r["id"] for r in response.json()["rooms"]] == ["R2"]
        mock_client.list_rooms.assert_called_once_with(
            property_id="P2", property_slug=None, room_id=None
        )

    def test_filters_by_slug(self, client: TestClient) -> None:
        response = client.get("/api/rooms", params={"slug": "piso-centro"})

        assert [r["id"] for r in response.json()["rooms"]] == ["R1"]

    def test_single_room_by_id(self, client: TestClient, mock_client: MagicMock) -> None:
        mock_client.list_rooms.return_value = [RoomListing(id="R3", name="Suite")]

        response = client.get("/api/rooms", params={"id": "R3"})
        assert response.status_code == HTTP_200_OK

        rooms = response.json()["rooms"]
        assert [r["name"] for r in rooms] == ["Suite"]
        assert rooms[0]["amenities"] == {}

    def test_crm_failure_returns_502(self, client: TestClient, mock_client: MagicMock) -> None:
        mock_client.list_rooms.side_effect = ZohoClientError("zoho_timeout")

        response = client.get("/api/rooms")
        assert response.status_code == HTTP_502_BAD_GATEWAY
        assert response.json()["error_code"] == "ERR_CRM_001"


class TestListRoomsOverHttp:
    """GET /api/rooms against a CRM served by httpx.MockTransport."""

    def test_maps_crm_records(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/crm/v8/Habitaciones"
            return httpx.Response(
                200,
                json={
                    "data": [
                        {
                            "id": "900",
                            "Name": "Habitación Doble",
                            "Inmueble_Principal": {"id": "P1", "name": "Piso Centro"},
                            "A_C_Aire_Acondicionado": True,
                        }
                    ]
                },
            )

        crm = ZohoClient(
            settings=ZohoSettings(api_base_url="https://crm.test/crm/v8", access_token="tok"),
            token_provider=lambda: "tok",
            http=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        app.dependency_overrides[get_room_catalog_service] = lambda: RoomCatalogService(
            client=crm
        )
        try:
            response = TestClient(app).get("/api/rooms", params={"propertyId": "P1"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == HTTP_200_OK
        [room] = response.json()["rooms"]
        assert room["property_name"] == "Piso Centro"
        assert room["features"] == ["Aire acondicionado"]
        assert room["amenities"] == {"Aire acondicionado": True}


class TestPropertyTypes:
    """Tests for GET /api/property-types."""

    def test_returns_default_types(self) -> None:
        response = TestClient(app).get("/api/property-types")

        assert response.status_code == HTTP_200_OK
        assert response.json() == {"property_types": ["Apartamento"]}
