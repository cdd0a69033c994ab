"""Enumeration types for rentals data models."""

from enum import Enum


class ReservationStatus(str, Enum):
    """Reservation status values used by the CRM reservations module."""

    PENDING = "Pendiente"
    CONFIRMED = "Confirmada"
    CANCELLED = "Cancelada"
    COMPLETED = "Completada"


# Lower-cased status spellings that mean the booking no longer holds a room
CANCELLED_STATUSES: frozenset[str] = frozenset(
    {"cancelada", "cancelado", "cancelled", "canceled"}
)


def is_cancelled_status(status: str | None) -> bool:
    """Check whether a raw status string denotes a cancelled reservation."""
    if not status:
        return False
    return status.strip().lower() in CANCELLED_STATUSES
