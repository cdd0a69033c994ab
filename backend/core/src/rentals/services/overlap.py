"""Day-level overlap between reservations and a requested window."""

from collections.abc import Iterable

from rentals.models import AvailabilityMetadata, RequestedWindow, ReservationRecord
from rentals.utils.dates import iter_days, to_iso


def reserved_days(
    window: RequestedWindow,
    reservations: Iterable[ReservationRecord],
) -> set[str]:
    """Collect the days of ``window`` covered by at least one reservation.

    Cancelled reservations, reservations with missing dates and zero or
    negative length reservations contribute nothing.

    Args:
        window: Requested stay
        reservations: Reservations of the property's rooms

    Returns:
        ISO dates reserved within the window
    """
    days: set[str] = set()
    for reservation in reservations:
        clipped = reservation.overlap(window.start, window.end)
        if clipped is None:
            continue
        overlap_start, overlap_end = clipped
        days.update(to_iso(d) for d in iter_days(overlap_start, overlap_end))
    return days


def compute_day_overlap(
    window: RequestedWindow,
    reservations: Iterable[ReservationRecord],
) -> AvailabilityMetadata:
    """Split the requested window into free and reserved nights.

    ``available_dates`` and ``unavailable_dates`` partition the window's
    days: together they contain every day of ``[start, end)`` exactly once.

    Args:
        window: Requested stay
        reservations: Reservations of the property's rooms

    Returns:
        AvailabilityMetadata for the window
    """
    reserved = reserved_days(window, reservations)

    available: list[str] = []
    unavailable: list[str] = []
    for day in iter_days(window.start, window.end):
        iso_day = to_iso(day)
        if iso_day in reserved:
            unavailable.append(iso_day)
        else:
            available.append(iso_day)

    return AvailabilityMetadata(
        available_dates=available,
        unavailable_dates=unavailable,
        available_nights=window.nights - len(unavailable),
        is_fully_available=not unavailable,
    )
