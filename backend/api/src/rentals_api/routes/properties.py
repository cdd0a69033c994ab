"""Property search endpoint.

Lists rental properties, optionally limited to a stay window. With dates,
properties whose rooms are all reserved, or whose declared availability does
not cover the stay, are left out. Every returned property carries the nights
that are still free.

All dates are in YYYY-MM-DD format; check_out is exclusive.
"""

import datetime as dt

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from rentals.services.property_search import PropertySearchService
from rentals_api.dependencies import get_property_search_service
from rentals_api.models.properties import PropertySearchResponse

router = APIRouter(tags=["properties"])


@router.get(
    "/properties",
    summary="Search bookable properties",
    description="""
List properties that can be booked for the requested dates.

**Notes:**
- Omit both dates to browse every property (no reservation check)
- check_out is exclusive (last night is check_out - 1 day)
- A property is hidden only when all of its rooms are reserved on some night
  of the stay; partially reserved properties are returned with
  `unavailable_dates` filled in
- `reservations_checked` is false when reservation data could not be loaded
""",
    response_model=PropertySearchResponse,
    responses={
        400: {"description": "Invalid or incomplete date range"},
        502: {"description": "CRM unavailable or rejected credentials"},
    },
)
async def search_properties(
    check_in: dt.date | None = Query(
        None,
        description="Check-in date (YYYY-MM-DD)",
        examples=["2025-03-01"],
    ),
    check_out: dt.date | None = Query(
        None,
        description="Check-out date (YYYY-MM-DD)",
        examples=["2025-03-05"],
    ),
    property_type: str | None = Query(
        None,
        description="Property type, case-insensitive (e.g., Apartamento)",
    ),
    location: str | None = Query(
        None,
        description="City or location, case-insensitive",
    ),
    service: PropertySearchService = Depends(get_property_search_service),
) -> PropertySearchResponse:
    """Search properties for the requested stay."""
    result = await run_in_threadpool(
        service.search,
        check_in=check_in,
        check_out=check_out,
        property_type=property_type or None,
        location=location or None,
    )
    return PropertySearchResponse(
        properties=result.properties,
        available_types=result.available_types,
        reservations_checked=result.reservations_checked,
    )
