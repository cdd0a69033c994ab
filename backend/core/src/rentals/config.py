"""Environment-driven configuration for the Zoho CRM collaborators."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_BASE_URL = "https://www.zohoapis.eu/crm/v8"
DEFAULT_RESERVATIONS_MODULE = "Reservaciones"


class ZohoSettings(BaseModel):
    """Settings for talking to the Zoho CRM REST and COQL endpoints.

    The access token is either given directly (``ZOHO_ACCESS_TOKEN``) or read
    from SSM Parameter Store (``ZOHO_ACCESS_TOKEN_PARAMETER``), where an
    external job keeps it fresh.
    """

    model_config = ConfigDict(frozen=True)

    api_base_url: str = DEFAULT_API_BASE_URL
    reservations_module: str = DEFAULT_RESERVATIONS_MODULE
    properties_module: str = "Inmuebles"
    rooms_module: str = "Habitaciones"
    access_token: str | None = None
    access_token_parameter: str | None = None
    timeout_seconds: float = Field(default=15.0, gt=0)
    room_batch_size: int = Field(default=50, ge=1, le=50)
    reservation_page_size: int = Field(default=200, ge=1, le=2000)
    max_workers: int = Field(default=4, ge=1)

    @property
    def coql_endpoint(self) -> str:
        return f"{self.api_base_url}/coql"

    def module_endpoint(self, module: str) -> str:
        return f"{self.api_base_url}/{module}"

    @classmethod
    def from_env(cls) -> "ZohoSettings":
        """Build settings from environment variables."""
        return cls(
            api_base_url=os.getenv("ZOHO_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            reservations_module=os.getenv(
                "ZOHO_RESERVATIONS_MODULE", DEFAULT_RESERVATIONS_MODULE
            ),
            access_token=os.getenv("ZOHO_ACCESS_TOKEN") or None,
            access_token_parameter=os.getenv("ZOHO_ACCESS_TOKEN_PARAMETER") or None,
            timeout_seconds=float(os.getenv("ZOHO_TIMEOUT_SECONDS", "15")),
            room_batch_size=int(os.getenv("ZOHO_ROOM_BATCH_SIZE", "50")),
            reservation_page_size=int(os.getenv("ZOHO_RESERVATION_PAGE_SIZE", "200")),
            max_workers=int(os.getenv("ZOHO_MAX_WORKERS", "4")),
        )
