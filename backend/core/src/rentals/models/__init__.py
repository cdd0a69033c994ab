"""Pydantic models for rentals data entities."""

from .availability import (
    AvailabilityEvaluation,
    AvailabilityMetadata,
    PropertyAvailability,
    RequestedWindow,
)
from .enums import CANCELLED_STATUSES, ReservationStatus, is_cancelled_status
from .errors import ERROR_MESSAGES, ERROR_RECOVERY, ErrorCode, RentalsError, ToolError
from .property import (
    DEFAULT_PROPERTY_TYPE,
    DEFAULT_PROPERTY_TYPES,
    PropertyCandidate,
    PropertyListing,
)
from .reservation import ReservationRecord
from .room import DEFAULT_ROOM_NAME, RoomListing

__all__ = [
    # Enums
    "CANCELLED_STATUSES",
    "ReservationStatus",
    "is_cancelled_status",
    # Availability
    "AvailabilityEvaluation",
    "AvailabilityMetadata",
    "PropertyAvailability",
    "RequestedWindow",
    # Property
    "DEFAULT_PROPERTY_TYPE",
    "DEFAULT_PROPERTY_TYPES",
    "PropertyCandidate",
    "PropertyListing",
    # Reservation
    "ReservationRecord",
    # Room
    "DEFAULT_ROOM_NAME",
    "RoomListing",
    # Errors
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ErrorCode",
    "RentalsError",
    "ToolError",
]
