"""Room-count based fully-booked decisions per property.

A property is made of rooms that are booked independently, so a single
reservation must not hide the whole property. A room counts as occupied for
a search when any of its active reservations intersects the window.
"""

from collections.abc import Iterable, Mapping

from rentals.models import RequestedWindow, ReservationRecord


def occupied_room_ids(
    window: RequestedWindow,
    reservations: Iterable[ReservationRecord],
) -> set[str]:
    """Distinct room ids with an active reservation overlapping the window."""
    return {
        reservation.unit_id
        for reservation in reservations
        if reservation.unit_id
        and reservation.overlap(window.start, window.end) is not None
    }


def occupied_rooms_by_property(
    window: RequestedWindow,
    reservations: Iterable[ReservationRecord],
    room_to_property: Mapping[str, str],
) -> dict[str, int]:
    """Count distinct occupied rooms for each property.

    Rooms that cannot be resolved to a property are ignored.

    Args:
        window: Requested stay
        reservations: Reservations for all rooms relevant to the search
        room_to_property: Room id to property id lookup

    Returns:
        Mapping of property id to its number of occupied rooms
    """
    counts: dict[str, int] = {}
    for room_id in occupied_room_ids(window, reservations):
        property_id = room_to_property.get(room_id)
        if not property_id:
            continue
        counts[property_id] = counts.get(property_id, 0) + 1
    return counts


def is_fully_booked(total_rooms: int | None, occupied_rooms: int) -> bool:
    """Decide whether every room of a property is taken.

    A property without a positive declared room count is never fully booked.
    """
    if not total_rooms or total_rooms <= 0:
        return False
    return occupied_rooms >= total_rooms
