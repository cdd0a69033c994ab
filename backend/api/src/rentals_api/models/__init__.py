"""API-specific request/response models.

Domain models (PropertyListing, RoomListing, etc.) live in rentals.models
and are reused here.
"""

from rentals_api.models.properties import HealthResponse, PropertySearchResponse
from rentals_api.models.rooms import PropertyTypesResponse, RoomsResponse

__all__ = [
    "HealthResponse",
    "PropertySearchResponse",
    "PropertyTypesResponse",
    "RoomsResponse",
]
