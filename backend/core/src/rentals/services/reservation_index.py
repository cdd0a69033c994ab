"""Grouping of reservation records by the room they reference."""

from collections.abc import Iterable, Mapping

from rentals.models import ReservationRecord

ReservationIndex = dict[str, list[ReservationRecord]]


def build_index(reservations: Iterable[ReservationRecord]) -> ReservationIndex:
    """Group reservations by unit (room) id.

    Records without a unit id are skipped. Within a unit, records keep their
    input order.

    Args:
        reservations: Reservation records for the search

    Returns:
        Mapping of unit id to its reservations
    """
    index: ReservationIndex = {}
    for reservation in reservations:
        if not reservation.unit_id:
            continue
        index.setdefault(reservation.unit_id, []).append(reservation)
    return index


def reservations_by_property(
    index: Mapping[str, list[ReservationRecord]],
    room_to_property: Mapping[str, str],
) -> dict[str, list[ReservationRecord]]:
    """Regroup an index by owning property.

    Rooms missing from ``room_to_property`` cannot be traced to a property
    and are dropped.

    Args:
        index: Reservations grouped by unit id
        room_to_property: Unit id to property id lookup

    Returns:
        Mapping of property id to the reservations of all its rooms
    """
    grouped: dict[str, list[ReservationRecord]] = {}
    for unit_id, records in index.items():
        property_id = room_to_property.get(unit_id)
        if not property_id:
            continue
        grouped.setdefault(property_id, []).extend(records)
    return grouped
