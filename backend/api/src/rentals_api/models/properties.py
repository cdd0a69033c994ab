"""API models for the property search endpoint."""

from pydantic import BaseModel, ConfigDict, Field

from rentals.services.property_search import PropertySearchResult


class PropertySearchResponse(PropertySearchResult):
    """Search response: bookable properties with per-night availability."""

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "examples": [
                {
                    "properties": [
                        {
                            "id": "5843127000001234567",
                            "title": "Piso Centro",
                            "property_type": "Apartamento",
                            "location": "Madrid",
                            "price_per_night": 95.0,
                            "slug": "piso-centro",
                            "total_rooms": 2,
                            "start_of_availability": "2025-01-01",
                            "end_of_availability": "2025-12-31",
                            "available_dates": ["2025-03-01", "2025-03-03", "2025-03-04"],
                            "unavailable_dates": ["2025-03-02"],
                            "available_nights": 3,
                            "is_fully_available": False,
                        }
                    ],
                    "available_types": ["Apartamento", "Estudio"],
                    "reservations_checked": True,
                }
            ]
        },
    )


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(strict=True)

    status: str = Field(default="healthy", examples=["healthy"])
    version: str = Field(..., examples=["0.1.0"])
