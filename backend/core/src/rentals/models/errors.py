"""Standard error codes for the rentals service.

All services raise RentalsError with one of these codes so that the API
layer can produce consistent error responses.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    # Search validation errors (ERR_001-ERR_002)
    INVALID_DATE_RANGE = "ERR_001"
    INCOMPLETE_DATE_RANGE = "ERR_002"

    # Upstream CRM errors (ERR_CRM_001-ERR_CRM_002)
    CRM_UNAVAILABLE = "ERR_CRM_001"
    CRM_AUTH_FAILED = "ERR_CRM_002"

    # Deployment errors
    CONFIGURATION_ERROR = "ERR_CONFIG_001"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_DATE_RANGE: "Check-out date must be after check-in date",
    ErrorCode.INCOMPLETE_DATE_RANGE: "Both check-in and check-out dates are required",
    ErrorCode.CRM_UNAVAILABLE: "Property data could not be retrieved from the CRM",
    ErrorCode.CRM_AUTH_FAILED: "The CRM rejected the configured credentials",
    ErrorCode.CONFIGURATION_ERROR: "CRM credentials are not configured",
}

# Recovery suggestions for clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.INVALID_DATE_RANGE: "Choose a check-out date later than the check-in date",
    ErrorCode.INCOMPLETE_DATE_RANGE: "Provide both dates or neither to browse all properties",
    ErrorCode.CRM_UNAVAILABLE: "Try again in a few moments",
    ErrorCode.CRM_AUTH_FAILED: "Rotate the CRM access token and retry",
    ErrorCode.CONFIGURATION_ERROR: "Set ZOHO_ACCESS_TOKEN or ZOHO_ACCESS_TOKEN_PARAMETER",
}


class ToolError(BaseModel):
    """Standard error response body."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ToolError":
        """Create a ToolError from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            A ToolError with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class RentalsError(Exception):
    """Exception raised by search and CRM operations.

    Can be caught and converted to a ToolError for API responses.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_tool_error(self) -> ToolError:
        """Convert this exception to a ToolError."""
        return ToolError.from_code(self.code, self.details)
