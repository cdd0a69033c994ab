"""API routes package.

- health: Health check endpoint
- properties: Property search with date-window availability
- property_types: Default property types for the search filters
- rooms: Room listing by property or room id

All routers are registered in main.py with /api prefix.
"""

from rentals_api.routes.health import router as health_router
from rentals_api.routes.properties import router as properties_router
from rentals_api.routes.property_types import router as property_types_router
from rentals_api.routes.rooms import router as rooms_router

__all__ = ["health_router", "properties_router", "property_types_router", "rooms_router"]
