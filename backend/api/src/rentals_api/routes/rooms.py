"""Room listing endpoint.

Lists rooms from the CRM rooms module, for a property page (by property id
or slug) or a single room page (by room id).
"""

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from rentals.services.room_catalog import RoomCatalogService
from rentals_api.dependencies import get_room_catalog_service
from rentals_api.models.rooms import RoomsResponse

router = APIRouter(tags=["rooms"])


@router.get(
    "/rooms",
    summary="List rooms",
    description="""
List rooms with their amenities and owning property.

**Notes:**
- `id` returns that room alone and takes precedence over the other filters
- Without `id`, rooms not attached to a property are left out
- `property_id` takes precedence over `slug` when both are given
""",
    response_model=RoomsResponse,
    responses={
        502: {"description": "CRM unavailable or rejected credentials"},
    },
)
async def list_rooms(
    property_id: str | None = Query(
        None,
        alias="propertyId",
        description="CRM id of the owning property",
    ),
    slug: str | None = Query(
        None,
        description="Public slug of the owning property",
    ),
    room_id: str | None = Query(
        None,
        alias="id",
        description="CRM id of a single room",
    ),
    service: RoomCatalogService = Depends(get_room_catalog_service),
) -> RoomsResponse:
    """List rooms for a property or a single room."""
    rooms = await run_in_threadpool(
        service.list_rooms,
        property_id=property_id or None,
        property_slug=slug or None,
        room_id=room_id or None,
    )
    return RoomsResponse(rooms=rooms)
