"""Availability services and CRM collaborators."""

from .availability import (
    AvailabilityService,
    MetadataCache,
    evaluate_availability,
    passes_declared_window,
)
from .capacity import is_fully_booked, occupied_room_ids, occupied_rooms_by_property
from .overlap import compute_day_overlap, reserved_days
from .property_search import PropertySearchResult, PropertySearchService, build_window
from .reservation_index import build_index, reservations_by_property
from .room_catalog import RoomCatalogService, keep_room
from .ssm_service import SSMService, SSMServiceError, get_ssm_service
from .zoho_client import (
    ZohoAuthError,
    ZohoClient,
    ZohoClientError,
    build_token_invalidator,
    build_token_provider,
)

__all__ = [
    "AvailabilityService",
    "MetadataCache",
    "evaluate_availability",
    "passes_declared_window",
    "is_fully_booked",
    "occupied_room_ids",
    "occupied_rooms_by_property",
    "compute_day_overlap",
    "reserved_days",
    "PropertySearchResult",
    "PropertySearchService",
    "build_window",
    "build_index",
    "reservations_by_property",
    "RoomCatalogService",
    "keep_room",
    "SSMService",
    "SSMServiceError",
    "get_ssm_service",
    "ZohoAuthError",
    "ZohoClient",
    "ZohoClientError",
    "build_token_invalidator",
    "build_token_provider",
]
