"""Property search orchestrating CRM fetches and availability evaluation."""

import datetime as dt
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from rentals.models import (
    DEFAULT_PROPERTY_TYPE,
    ErrorCode,
    PropertyCandidate,
    PropertyListing,
    RentalsError,
    RequestedWindow,
)
from rentals.services.availability import (
    MetadataCache,
    evaluate_availability,
    passes_declared_window,
)
from rentals.services.ssm_service import SSMServiceError
from rentals.services.zoho_client import ZohoAuthError, ZohoClientError
from rentals.utils.logging import get_logger, log_search_operation

if TYPE_CHECKING:
    from .zoho_client import ZohoClient

logger = get_logger(__name__)


class PropertySearchResult(BaseModel):
    """Properties that can be offered for a search."""

    model_config = ConfigDict(strict=True)

    properties: list[PropertyListing] = Field(default_factory=list)
    available_types: list[str] = Field(default_factory=lambda: [DEFAULT_PROPERTY_TYPE])
    reservations_checked: bool = False


def build_window(
    check_in: dt.date | None,
    check_out: dt.date | None,
) -> RequestedWindow | None:
    """Validate requested dates and build the stay window.

    Args:
        check_in: Requested check-in date
        check_out: Requested check-out date

    Returns:
        RequestedWindow, or None when neither date was given

    Raises:
        RentalsError: INCOMPLETE_DATE_RANGE when only one date is given,
            INVALID_DATE_RANGE when check-out is not after check-in
    """
    if check_in is None and check_out is None:
        return None
    if check_in is None or check_out is None:
        raise RentalsError(ErrorCode.INCOMPLETE_DATE_RANGE)
    if check_out <= check_in:
        raise RentalsError(
            ErrorCode.INVALID_DATE_RANGE,
            details={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )
    return RequestedWindow(start=check_in, end=check_out)


def _matches(value: str | None, wanted: str | None) -> bool:
    if not wanted:
        return True
    return (value or "").strip().lower() == wanted.strip().lower()


class PropertySearchService:
    """Service for searching bookable properties."""

    def __init__(self, client: "ZohoClient") -> None:
        """Initialize property search service.

        Args:
            client: Zoho CRM client used to fetch search inputs
        """
        self.client = client

    def _fetch_candidates(
        self,
        property_type: str | None,
        location: str | None,
    ) -> list[PropertyCandidate]:
        try:
            return self.client.list_properties(property_type=property_type, location=location)
        except ZohoAuthError as e:
            log_search_operation(logger, "fetch_properties", error=str(e))
            raise RentalsError(ErrorCode.CRM_AUTH_FAILED) from e
        except (ZohoClientError, SSMServiceError) as e:
            log_search_operation(logger, "fetch_properties", error=str(e))
            raise RentalsError(ErrorCode.CRM_UNAVAILABLE) from e

    def search(
        self,
        check_in: dt.date | None = None,
        check_out: dt.date | None = None,
        property_type: str | None = None,
        location: str | None = None,
    ) -> PropertySearchResult:
        """Search properties that can be offered for the requested stay.

        Without dates every candidate is returned with default metadata.
        With dates, reservations and the room lookup are fetched and fully
        booked properties, or properties outside their declared window, are
        dropped. When reservation data cannot be fetched only the declared
        window is applied and a warning is logged, since offering properties
        without the capacity check risks double booking.

        Args:
            check_in: Requested check-in date
            check_out: Requested check-out date (exclusive)
            property_type: Optional property type filter (case-insensitive)
            location: Optional location filter (case-insensitive)

        Returns:
            PropertySearchResult

        Raises:
            RentalsError: For invalid dates or when properties cannot be listed
        """
        window = build_window(check_in, check_out)
        candidates = self._fetch_candidates(property_type, location)

        check_in_iso = window.start.isoformat() if window else None
        check_out_iso = window.end.isoformat() if window else None

        reservations_checked = window is None
        visible = candidates
        cache = MetadataCache()

        if window is None:
            evaluation = evaluate_availability(candidates, None, [], {}, cache=cache)
        else:
            try:
                reservations = self.client.fetch_overlapping_reservations(window)
                room_ids = [r.unit_id for r in reservations if r.unit_id]
                room_to_property = self.client.get_room_property_ids(room_ids)
            except (ZohoClientError, SSMServiceError) as e:
                log_search_operation(
                    logger,
                    "fetch_reservations",
                    check_in=check_in_iso,
                    check_out=check_out_iso,
                    candidates=len(candidates),
                    warning=(
                        "reservation data unavailable, returning properties "
                        f"without capacity check (double-booking risk): {e}"
                    ),
                )
                evaluation = evaluate_availability(candidates, None, [], {}, cache=cache)
                visible = [
                    c for c in candidates if passes_declared_window(c.availability, window)
                ]
            else:
                reservations_checked = True
                evaluation = evaluate_availability(
                    candidates, window, reservations, room_to_property, cache=cache
                )
                visible = [c for c in candidates if evaluation.is_available(c.id)]
                log_search_operation(
                    logger,
                    "evaluate",
                    check_in=check_in_iso,
                    check_out=check_out_iso,
                    candidates=len(candidates),
                    returned=len(visible),
                    reservations=len(reservations),
                    fully_booked=len(evaluation.fully_booked),
                    nights=window.nights,
                )

        filtered = [
            c
            for c in visible
            if _matches(c.property_type, property_type) and _matches(c.location, location)
        ]

        types = sorted({c.property_type for c in candidates if c.property_type})

        return PropertySearchResult(
            properties=[
                PropertyListing.from_candidate(c, evaluation.metadata.get(c.id))
                for c in filtered
            ],
            available_types=types or [DEFAULT_PROPERTY_TYPE],
            reservations_checked=reservations_checked,
        )
