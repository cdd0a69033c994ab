"""API models for the room and property type endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from rentals.models import RoomListing


class RoomsResponse(BaseModel):
    """Rooms of the portfolio, optionally narrowed to one property."""

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "examples": [
                {
                    "rooms": [
                        {
                            "id": "5843127000002345678",
                            "name": "Habitación Doble Exterior",
                            "property_id": "5843127000001234567",
                            "property_name": "Piso Centro",
                            "property_slug": "piso-centro",
                            "image_url": None,
                            "price_per_night": 45.0,
                            "bathrooms": 1.0,
                            "square_meters": 14.0,
                            "description": "",
                            "features": ["Aire acondicionado", "Escritorio"],
                            "amenities": {"Aire acondicionado": True, "Escritorio": True},
                            "has_terrace": False,
                            "has_washer": None,
                        }
                    ]
                }
            ]
        },
    )

    rooms: list[RoomListing] = Field(default_factory=list)


class PropertyTypesResponse(BaseModel):
    """Property types offered in the search filters."""

    model_config = ConfigDict(strict=True)

    property_types: list[str] = Field(..., examples=[["Apartamento"]])
