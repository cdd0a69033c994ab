"""Reservation records as consumed by the availability checks."""

import datetime as dt

from pydantic import BaseModel, ConfigDict

from .enums import ReservationStatus, is_cancelled_status


class ReservationRecord(BaseModel):
    """One existing booking of a room (unit) of a property.

    Records are read-only snapshots fetched per search. A record without a
    unit id, without both dates, or with a cancelled status carries no
    constraint.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    id: str | None = None
    unit_id: str | None = None
    check_in: dt.date | None = None
    check_out: dt.date | None = None
    status: str = ReservationStatus.PENDING.value

    @property
    def is_cancelled(self) -> bool:
        """Whether the reservation was cancelled."""
        return is_cancelled_status(self.status)

    @property
    def has_valid_dates(self) -> bool:
        """Whether both dates are present and span at least one night."""
        return (
            self.check_in is not None
            and self.check_out is not None
            and self.check_out > self.check_in
        )

    @property
    def is_active(self) -> bool:
        """Whether the reservation can occupy a room at all."""
        return self.has_valid_dates and not self.is_cancelled

    def overlap(self, start: dt.date, end: dt.date) -> tuple[dt.date, dt.date] | None:
        """Clip this reservation to ``[start, end)``.

        Args:
            start: Window start (inclusive)
            end: Window end (exclusive)

        Returns:
            The non-empty ``(overlap_start, overlap_end)`` pair, or None when
            the reservation is inactive or does not intersect the window
        """
        if self.is_cancelled or self.check_in is None or self.check_out is None:
            return None
        overlap_start = max(self.check_in, start)
        overlap_end = min(self.check_out, end)
        if overlap_start >= overlap_end:
            return None
        return overlap_start, overlap_end
