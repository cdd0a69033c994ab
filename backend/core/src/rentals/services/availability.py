"""Availability filter combining declared windows with room occupancy.

A property is offered for a requested window when:

1. the window lies inside the property's declared availability bounds, and
2. not every room of the property is occupied during the window.

Day-level metadata (which nights are free) is computed for every property
and attached to results, but it does not gate inclusion. Only the room
count rule does, so that one booked room never hides a multi-room property.
"""

from collections.abc import Iterable, Mapping

from rentals.models import (
    AvailabilityEvaluation,
    AvailabilityMetadata,
    PropertyAvailability,
    PropertyCandidate,
    RequestedWindow,
    ReservationRecord,
)
from rentals.services.capacity import is_fully_booked, occupied_room_ids
from rentals.services.overlap import compute_day_overlap
from rentals.services.reservation_index import build_index, reservations_by_property
from rentals.utils.logging import get_logger

logger = get_logger(__name__)


class MetadataCache:
    """Per-request memo of computed metadata.

    Created by the caller for a single search and discarded afterwards.
    Reservation data may change between requests, so instances must never
    be shared across searches.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, RequestedWindow | None], AvailabilityMetadata] = {}

    def get(
        self,
        property_id: str,
        window: RequestedWindow | None,
    ) -> AvailabilityMetadata | None:
        return self._entries.get((property_id, window))

    def set(
        self,
        property_id: str,
        window: RequestedWindow | None,
        metadata: AvailabilityMetadata,
    ) -> None:
        self._entries[(property_id, window)] = metadata

    def __len__(self) -> int:
        return len(self._entries)


def passes_declared_window(
    declared: PropertyAvailability,
    window: RequestedWindow,
) -> bool:
    """Check the requested window against a property's declared bounds.

    Args:
        declared: Declared availability of the property
        window: Requested stay

    Returns:
        False if the window starts before the declared start or ends after
        the declared end; True otherwise (absent bounds never reject)
    """
    start = declared.start_of_availability
    end = declared.end_of_availability

    if start is not None and start > window.start:
        return False
    if end is not None and end < window.end:
        return False
    return True


class AvailabilityService:
    """Evaluates property availability against one reservation snapshot.

    The service is bound to the reservations and room lookup fetched for a
    single search. It is pure: it never mutates its inputs and performs no
    I/O.
    """

    def __init__(
        self,
        reservations: Iterable[ReservationRecord],
        room_to_property: Mapping[str, str],
        cache: MetadataCache | None = None,
    ) -> None:
        """Initialize availability service.

        Args:
            reservations: Reservation records for every room relevant to the search
            room_to_property: Room id to owning property id lookup
            cache: Optional per-request metadata memo
        """
        self.room_to_property = room_to_property
        self.cache = cache if cache is not None else MetadataCache()
        self._index = build_index(reservations)
        self._by_property = reservations_by_property(self._index, room_to_property)

    def reservations_for(self, property_id: str) -> list[ReservationRecord]:
        """Reservations of all rooms that belong to the property."""
        return self._by_property.get(property_id, [])

    def occupied_rooms(self, property_id: str, window: RequestedWindow) -> int:
        """Number of distinct rooms of the property occupied during the window."""
        return len(occupied_room_ids(window, self.reservations_for(property_id)))

    def is_fully_booked(self, candidate: PropertyCandidate, window: RequestedWindow) -> bool:
        """Whether every declared room of the property is occupied."""
        return is_fully_booked(
            candidate.total_rooms,
            self.occupied_rooms(candidate.id, window),
        )

    def compute_metadata(
        self,
        candidate: PropertyCandidate,
        window: RequestedWindow | None,
    ) -> AvailabilityMetadata:
        """Compute day-level availability for one property.

        Args:
            candidate: Property to describe
            window: Requested stay, or None when browsing without dates

        Returns:
            AvailabilityMetadata; defaults when no window was requested
        """
        cached = self.cache.get(candidate.id, window)
        if cached is not None:
            return cached

        if window is None:
            metadata = AvailabilityMetadata()
        else:
            metadata = compute_day_overlap(window, self.reservations_for(candidate.id))

        self.cache.set(candidate.id, window, metadata)
        return metadata

    def is_property_available(
        self,
        candidate: PropertyCandidate,
        window: RequestedWindow | None,
    ) -> bool:
        """Decide whether the property may be offered for the window.

        Without a window every property is available. With a window the
        property must pass its declared bounds and must not be fully booked.
        """
        if window is None:
            return True
        if not passes_declared_window(candidate.availability, window):
            return False
        return not self.is_fully_booked(candidate, window)

    def evaluate(
        self,
        candidates: Iterable[PropertyCandidate],
        window: RequestedWindow | None,
    ) -> AvailabilityEvaluation:
        """Evaluate a batch of candidate properties for one window.

        Args:
            candidates: Properties to evaluate
            window: Requested stay, or None when browsing without dates

        Returns:
            AvailabilityEvaluation with metadata for every candidate
        """
        metadata: dict[str, AvailabilityMetadata] = {}
        fully_booked: set[str] = set()
        rejected_by_window: set[str] = set()

        for candidate in candidates:
            metadata[candidate.id] = self.compute_metadata(candidate, window)
            if window is None:
                continue
            if not passes_declared_window(candidate.availability, window):
                rejected_by_window.add(candidate.id)
            elif self.is_fully_booked(candidate, window):
                fully_booked.add(candidate.id)

        if window is not None:
            logger.debug(
                "Evaluated %d properties for %s..%s: %d fully booked, %d outside declared window",
                len(metadata),
                window.start.isoformat(),
                window.end.isoformat(),
                len(fully_booked),
                len(rejected_by_window),
            )

        return AvailabilityEvaluation(
            window=window,
            metadata=metadata,
            fully_booked=fully_booked,
            rejected_by_window=rejected_by_window,
        )


def evaluate_availability(
    properties: Iterable[PropertyCandidate],
    window: RequestedWindow | None,
    reservations: Iterable[ReservationRecord],
    room_to_property: Mapping[str, str],
    cache: MetadataCache | None = None,
) -> AvailabilityEvaluation:
    """Evaluate availability for a search in one call.

    Args:
        properties: Candidate properties
        window: Requested stay, or None when browsing without dates
        reservations: Reservation records relevant to the window
        room_to_property: Room id to property id lookup
        cache: Optional per-request metadata memo

    Returns:
        AvailabilityEvaluation exposing ``metadata`` and ``is_available(id)``
    """
    service = AvailabilityService(reservations, room_to_property, cache=cache)
    return service.evaluate(properties, window)
