"""Unit tests for room-count based fully-booked decisions."""

from collections.abc import Callable

import pytest

from rentals.models import RequestedWindow, ReservationRecord
from rentals.services.capacity import (
    is_fully_booked,
    occupied_room_ids,
    occupied_rooms_by_property,
)

Window = Callable[[str, str], RequestedWindow]
Reservation = Callable[..., ReservationRecord]


class TestOccupiedRooms:
    """Tests for occupied room counting."""

    def test_counts_distinct_rooms(self, window: Window, make_reservation: Reservation) -> None:
        """Two bookings of the same room count once."""
        rooms = occupied_room_ids(
            window("2025-03-01", "2025-03-10"),
            [
                make_reservation("R1", "2025-03-01", "2025-03-02"),
                make_reservation("R1", "2025-03-05", "2025-03-06"),
                make_reservation("R2", "2025-03-03", "2025-03-04"),
            ],
        )

        assert rooms == {"R1", "R2"}

    def test_ignores_non_overlapping_and_cancelled(
        self, window: Window, make_reservation: Reservation
    ) -> None:
        rooms = occupied_room_ids(
            window("2025-03-05", "2025-03-08"),
            [
                make_reservation("R1", "2025-03-01", "2025-03-05"),
                make_reservation("R2", "2025-03-05", "2025-03-06", status="Cancelada"),
            ],
        )

        assert rooms == set()

    def test_groups_counts_by_property(
        self, window: Window, make_reservation: Reservation
    ) -> None:
        counts = occupied_rooms_by_property(
            window("2025-03-01", "2025-03-05"),
            [
                make_reservation("R1", "2025-03-01", "2025-03-02"),
                make_reservation("R2", "2025-03-02", "2025-03-03"),
                make_reservation("R3", "2025-03-02", "2025-03-03"),
                make_reservation("R9", "2025-03-02", "2025-03-03"),
            ],
            {"R1": "P1", "R2": "P1", "R3": "P2"},
        )

        assert counts == {"P1": 2, "P2": 1}


class TestIsFullyBooked:
    """Tests for is_fully_booked."""

    @pytest.mark.parametrize(
        ("total_rooms", "occupied", "expected"),
        [
            (2, 1, False),
            (2, 2, True),
            (2, 3, True),
            (1, 0, False),
            (0, 5, False),
            (None, 5, False),
        ],
    )
    def test_rule(self, total_rooms: int | None, occupied: int, expected: bool) -> None:
        assert is_fully_booked(total_rooms, occupied) is expected
