"""Property types offered in the search filters."""

from fastapi import APIRouter

from rentals.models import DEFAULT_PROPERTY_TYPES
from rentals_api.models.rooms import PropertyTypesResponse

router = APIRouter(tags=["properties"])


@router.get(
    "/property-types",
    summary="List property types",
    response_model=PropertyTypesResponse,
)
async def list_property_types() -> PropertyTypesResponse:
    """Return the default property types.

    Types actually present in the CRM are returned by the search itself in
    ``available_types``.
    """
    return PropertyTypesResponse(property_types=list(DEFAULT_PROPERTY_TYPES))
