"""SSM Parameter Store access for the Zoho CRM access token.

Zoho access tokens expire after an hour and are rotated by an external job
that writes the fresh value to a SecureString parameter. Values read here are
kept for a short time only, so a rotated token is picked up without a
restart.
"""

import logging
import time
from functools import lru_cache
from typing import ClassVar

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300.0


class SSMServiceError(Exception):
    """Raised when a parameter cannot be read from SSM."""


class SSMService:
    """Reads decrypted SecureString parameters with a short-lived cache.

    The cache is shared by every instance in the process and keyed by
    parameter name. Entries older than ``cache_ttl_seconds`` are re-read.

    Usage:
        ssm = SSMService.get_instance()
        token = ssm.get_parameter("/rentals/prod/zoho/access_token")
    """

    _instance: ClassVar["SSMService | None"] = None
    _cache: ClassVar[dict[str, tuple[str, float]]] = {}

    def __init__(self, cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS) -> None:
        self._client = boto3.client("ssm")
        self.cache_ttl_seconds = cache_ttl_seconds

    @classmethod
    def get_instance(cls) -> "SSMService":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _cached(self, name: str) -> str | None:
        entry = self._cache.get(name)
        if entry is None:
            return None
        value, fetched_at = entry
        if time.monotonic() - fetched_at >= self.cache_ttl_seconds:
            return None
        return value

    def get_parameter(self, name: str, *, use_cache: bool = True) -> str:
        """Read a parameter, decrypting SecureString values.

        Args:
            name: Parameter name (e.g., "/rentals/prod/zoho/access_token")
            use_cache: Serve a fresh enough cached value when available

        Returns:
            The parameter value

        Raises:
            SSMServiceError: If the parameter is missing, access is denied or
                the call fails
        """
        if use_cache:
            cached = self._cached(name)
            if cached is not None:
                return cached

        logger.info("Reading SSM parameter %s", name)
        try:
            response = self._client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            if code == "ParameterNotFound":
                raise SSMServiceError(f"SSM parameter not found: {name}") from e
            if code == "AccessDeniedException":
                raise SSMServiceError(
                    f"Access denied to SSM parameter {name}; "
                    "the role needs ssm:GetParameter and kms:Decrypt"
                ) from e
            raise SSMServiceError(f"Could not read SSM parameter {name}: {e}") from e

        value = response["Parameter"]["Value"]
        self._cache[name] = (value, time.monotonic())
        return value

    def invalidate(self, name: str) -> None:
        """Drop one cached parameter, e.g. after the CRM rejected the token."""
        if self._cache.pop(name, None) is not None:
            logger.info("Dropped cached SSM parameter %s", name)

    def clear_cache(self) -> None:
        self._cache.clear()


@lru_cache(maxsize=1)
def get_ssm_service() -> SSMService:
    """Get the process-wide SSMService."""
    return SSMService.get_instance()


def reset_ssm_service() -> None:
    """Forget the shared instance and its cache (tests only)."""
    SSMService._cache.clear()
    SSMService._instance = None
    get_ssm_service.cache_clear()
