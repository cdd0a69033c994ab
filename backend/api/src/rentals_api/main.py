"""FastAPI application for the rental availability REST API.

This package provides REST endpoints for:
- Health checks
- Property search with date-window availability
- Room listing and property types
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from rentals.utils.logging import configure_logging
from rentals_api import __version__
from rentals_api.exceptions import register_exception_handlers
from rentals_api.middleware.correlation import CorrelationIdMiddleware
from rentals_api.routes.health import router as health_router
from rentals_api.routes.properties import router as properties_router
from rentals_api.routes.property_types import router as property_types_router
from rentals_api.routes.rooms import router as rooms_router

logger = logging.getLogger(__name__)
configure_logging(logging.INFO)

app = FastAPI(
    title="Rental Availability API",
    description="Property search backed by the Zoho CRM with reservation-aware availability",
    version=__version__,
)

# Configure CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(properties_router, prefix="/api")
app.include_router(property_types_router, prefix="/api")
app.include_router(rooms_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Root health check endpoint at /api/ping."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "rentals-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "rentals_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["backend/api/src", "backend/core/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
