"""FastAPI dependency injection providers for shared services.

Long-lived collaborators (settings, CRM client) are cached with @lru_cache.
Availability evaluation itself is request-scoped and never cached here.

Usage in routes:
    from rentals_api.dependencies import get_property_search_service

    @router.get("/properties")
    async def search(
        service: PropertySearchService = Depends(get_property_search_service),
    ):
        ...

Testing:
    Use app.dependency_overrides, or reset_services() to clear cached instances.
"""

from functools import lru_cache

from rentals.config import ZohoSettings
from rentals.services.property_search import PropertySearchService
from rentals.services.room_catalog import RoomCatalogService
from rentals.services.ssm_service import reset_ssm_service
from rentals.services.zoho_client import (
    ZohoClient,
    build_token_invalidator,
    build_token_provider,
)


@lru_cache
def get_settings() -> ZohoSettings:
    """Get cached settings read from the environment."""
    return ZohoSettings.from_env()


@lru_cache
def get_zoho_client() -> ZohoClient:
    """Get cached ZohoClient instance."""
    settings = get_settings()
    return ZohoClient(
        settings=settings,
        token_provider=build_token_provider(settings),
        on_auth_failure=build_token_invalidator(settings),
    )


def get_property_search_service() -> PropertySearchService:
    """Get a PropertySearchService bound to the shared CRM client."""
    return PropertySearchService(client=get_zoho_client())


def get_room_catalog_service() -> RoomCatalogService:
    """Get a RoomCatalogService bound to the shared CRM client."""
    return RoomCatalogService(client=get_zoho_client())


def reset_services() -> None:
    """Clear all cached service instances.

    Call this in test fixtures to ensure clean state between tests.
    """
    if get_zoho_client.cache_info().currsize:
        get_zoho_client().close()
    get_zoho_client.cache_clear()
    get_settings.cache_clear()
    reset_ssm_service()
