"""Property models for candidates returned by the CRM listing."""

from pydantic import BaseModel, ConfigDict, Field

from .availability import AvailabilityMetadata, PropertyAvailability

DEFAULT_PROPERTY_TYPE = "Apartamento"

# Types offered when the CRM is not consulted
DEFAULT_PROPERTY_TYPES = (DEFAULT_PROPERTY_TYPE,)


class PropertyCandidate(BaseModel):
    """A rental property whose rooms are booked independently.

    ``total_rooms`` is the declared room inventory. When it is None or zero
    the property is never treated as fully booked.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    total_rooms: int | None = Field(default=None, ge=0)
    availability: PropertyAvailability = Field(default_factory=PropertyAvailability)
    title: str = "Inmueble sin título"
    property_type: str = DEFAULT_PROPERTY_TYPE
    location: str | None = None
    price_per_night: float | None = None
    slug: str | None = None


class PropertyListing(BaseModel):
    """A property as returned by a search, decorated with availability."""

    model_config = ConfigDict(strict=True)

    id: str
    title: str
    property_type: str
    location: str | None = None
    price_per_night: float | None = None
    slug: str | None = None
    total_rooms: int | None = None
    start_of_availability: str | None = None
    end_of_availability: str | None = None
    available_dates: list[str] = Field(default_factory=list)
    unavailable_dates: list[str] = Field(default_factory=list)
    available_nights: int = 0
    is_fully_available: bool = True

    @classmethod
    def from_candidate(
        cls,
        candidate: PropertyCandidate,
        metadata: AvailabilityMetadata | None = None,
    ) -> "PropertyListing":
        """Build a listing from a candidate and its computed metadata."""
        metadata = metadata or AvailabilityMetadata()
        declared = candidate.availability
        return cls(
            id=candidate.id,
            title=candidate.title,
            property_type=candidate.property_type,
            location=candidate.location,
            price_per_night=candidate.price_per_night,
            slug=candidate.slug,
            total_rooms=candidate.total_rooms,
            start_of_availability=(
                declared.start_of_availability.isoformat()
                if declared.start_of_availability
                else None
            ),
            end_of_availability=(
                declared.end_of_availability.isoformat()
                if declared.end_of_availability
                else None
            ),
            available_dates=list(metadata.available_dates),
            unavailable_dates=list(metadata.unavailable_dates),
            available_nights=metadata.available_nights,
            is_fully_available=metadata.is_fully_available,
        )
