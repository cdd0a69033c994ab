"""Room models for the rooms module of the CRM."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ROOM_NAME = "Habitación sin nombre"


class RoomListing(BaseModel):
    """A bookable room and the property it belongs to.

    ``features`` merges the free-text feature list with the amenity flags
    set on the record; ``amenities`` keeps every known flag with its value.
    """

    model_config = ConfigDict(strict=True)

    id: str
    name: str = DEFAULT_ROOM_NAME
    property_id: str | None = None
    property_name: str | None = None
    property_slug: str | None = None
    image_url: str | None = None
    price_per_night: float | None = None
    bathrooms: float | None = None
    square_meters: float | None = None
    description: str = ""
    features: list[str] = Field(default_factory=list)
    amenities: dict[str, bool] = Field(default_factory=dict)
    has_terrace: bool | None = None
    has_washer: bool | None = None
