"""Room listing for property detail pages."""

from typing import TYPE_CHECKING

from rentals.models import ErrorCode, RentalsError, RoomListing
from rentals.services.ssm_service import SSMServiceError
from rentals.services.zoho_client import ZohoAuthError, ZohoClientError
from rentals.utils.logging import get_logger

if TYPE_CHECKING:
    from .zoho_client import ZohoClient

logger = get_logger(__name__)


def keep_room(
    room: RoomListing,
    property_id: str | None = None,
    property_slug: str | None = None,
    room_id: str | None = None,
) -> bool:
    """Decide whether a room fetched from the CRM is listed.

    A room asked for by id is always kept. Otherwise rooms not attached to
    a property are dropped, and the property id filter, or failing that the
    slug filter, must match.
    """
    if room_id and room.id == room_id:
        return True
    if not room.property_id:
        return False
    if property_id:
        return room.property_id == property_id
    if property_slug:
        return room.property_slug == property_slug
    return True


class RoomCatalogService:
    """Service for listing rooms of the rentals portfolio."""

    def __init__(self, client: "ZohoClient") -> None:
        self.client = client

    def list_rooms(
        self,
        property_id: str | None = None,
        property_slug: str | None = None,
        room_id: str | None = None,
    ) -> list[RoomListing]:
        """List rooms, optionally for one property or a single room.

        Args:
            property_id: CRM id of the owning property
            property_slug: Public slug of the owning property
            room_id: CRM id of one room

        Returns:
            Matching rooms in CRM order

        Raises:
            RentalsError: CRM_AUTH_FAILED or CRM_UNAVAILABLE when the CRM
                cannot be read
        """
        try:
            rooms = self.client.list_rooms(
                property_id=property_id,
                property_slug=property_slug,
                room_id=room_id,
            )
        except ZohoAuthError as e:
            logger.error("Room listing rejected by CRM: %s", e)
            raise RentalsError(ErrorCode.CRM_AUTH_FAILED) from e
        except (ZohoClientError, SSMServiceError) as e:
            logger.error("Room listing failed: %s", e)
            raise RentalsError(ErrorCode.CRM_UNAVAILABLE) from e

        kept = [r for r in rooms if keep_room(r, property_id, property_slug, room_id)]
        logger.info("Listed %d of %d rooms", len(kept), len(rooms))
        return kept
