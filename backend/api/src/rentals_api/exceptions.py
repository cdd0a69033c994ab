"""FastAPI exception handlers for converting RentalsError to HTTP responses.

The ErrorCode-to-HTTP status mapping follows REST conventions:
- 400 Bad Request: Invalid search parameters
- 500 Internal Server Error: Missing deployment configuration
- 502 Bad Gateway: CRM failures

Usage:
    from rentals_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from rentals.models.errors import ErrorCode, RentalsError

logger = logging.getLogger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_DATE_RANGE: HTTP_400_BAD_REQUEST,
    ErrorCode.INCOMPLETE_DATE_RANGE: HTTP_400_BAD_REQUEST,
    ErrorCode.CRM_UNAVAILABLE: HTTP_502_BAD_GATEWAY,
    ErrorCode.CRM_AUTH_FAILED: HTTP_502_BAD_GATEWAY,
    ErrorCode.CONFIGURATION_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 400."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def rentals_error_handler(request: Request, exc: RentalsError) -> JSONResponse:
    """Convert a RentalsError into a ToolError JSON response.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The RentalsError exception

    Returns:
        JSONResponse with error details and appropriate status code.
    """
    status_code = get_http_status_for_error(exc.code)
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Search failed with %s: %s", exc.code.value, exc.message)

    return JSONResponse(
        status_code=status_code,
        content=exc.to_tool_error().model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(RentalsError, rentals_error_handler)  # type: ignore[arg-type]
