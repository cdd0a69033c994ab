"""Availability models for stay windows and computed per-property metadata."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentals.utils.dates import nights_between


class RequestedWindow(BaseModel):
    """A requested stay as a half-open range ``[start, end)``.

    ``end`` is the check-out day, so the last night is ``end - 1 day``.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    start: dt.date = Field(..., description="Check-in date (inclusive)")
    end: dt.date = Field(..., description="Check-out date (exclusive)")

    @model_validator(mode="after")
    def validate_positive_length(self) -> "RequestedWindow":
        """Reject zero and negative length windows."""
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self

    @property
    def nights(self) -> int:
        """Number of nights covered by the window."""
        return nights_between(self.start, self.end)


class PropertyAvailability(BaseModel):
    """Declared outer bounds within which a property can ever be offered.

    Either bound may be None, meaning unconstrained on that side.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    start_of_availability: dt.date | None = None
    end_of_availability: dt.date | None = None


class AvailabilityMetadata(BaseModel):
    """Day-level availability of one property for one search.

    The defaults describe the unfiltered "browse all" case where no window
    was requested.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    available_dates: list[str] = Field(
        default_factory=list,
        description="Free nights in the requested window (YYYY-MM-DD, ascending)",
        examples=[["2025-03-01", "2025-03-03", "2025-03-04"]],
    )
    unavailable_dates: list[str] = Field(
        default_factory=list,
        description="Nights reserved in at least one room (YYYY-MM-DD, ascending)",
        examples=[["2025-03-02"]],
    )
    available_nights: int = Field(
        default=0,
        ge=0,
        description="Number of free nights in the requested window",
    )
    is_fully_available: bool = Field(
        default=True,
        description="True when no night in the window is reserved",
    )


class AvailabilityEvaluation(BaseModel):
    """Outcome of evaluating a batch of properties for one search.

    ``metadata`` holds an entry for every evaluated property, including the
    ones that were rejected, so callers can still describe them.
    """

    model_config = ConfigDict(strict=True)

    window: RequestedWindow | None = None
    metadata: dict[str, AvailabilityMetadata] = Field(default_factory=dict)
    fully_booked: set[str] = Field(default_factory=set)
    rejected_by_window: set[str] = Field(default_factory=set)

    def is_available(self, property_id: str) -> bool:
        """Whether the property was evaluated and may be offered."""
        return (
            property_id in self.metadata
            and property_id not in self.fully_booked
            and property_id not in self.rejected_by_window
        )

    @property
    def available_ids(self) -> list[str]:
        """Ids of the properties that may be offered, in evaluation order."""
        return [pid for pid in self.metadata if self.is_available(pid)]
