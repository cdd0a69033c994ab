"""Pytest configuration and fixtures for rental availability tests.

This module provides reusable fixtures for testing:
- AWS credential setup for moto
- Sample data builders (properties, reservations, windows)
- Singleton resets between tests
"""

import datetime as dt
import os
from collections.abc import Callable, Generator
from typing import Any

import pytest

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

# Never talk to a real CRM from tests
os.environ.setdefault("ZOHO_API_BASE_URL", "https://crm.test/crm/v8")
os.environ.setdefault("ZOHO_ACCESS_TOKEN", "test-token")

from rentals.models import (  # noqa: E402
    PropertyAvailability,
    PropertyCandidate,
    RequestedWindow,
    ReservationRecord,
)


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset cached services before and after each test.

    Tests that patch the environment or use mock_aws get fresh instances
    instead of ones built in a previous test.
    """
    from rentals_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


# === Sample Data Fixtures ===


def d(value: str) -> dt.date:
    """Shorthand for an ISO calendar day."""
    return dt.date.fromisoformat(value)


@pytest.fixture
def window() -> Callable[[str, str], RequestedWindow]:
    """Build a RequestedWindow from ISO strings."""

    def _build(start: str, end: str) -> RequestedWindow:
        return RequestedWindow(start=d(start), end=d(end))

    return _build


@pytest.fixture
def make_property() -> Callable[..., PropertyCandidate]:
    """Build a PropertyCandidate with optional declared bounds."""

    def _build(
        property_id: str = "P1",
        total_rooms: int | None = 1,
        start: str | None = None,
        end: str | None = None,
        **kwargs: Any,
    ) -> PropertyCandidate:
        return PropertyCandidate(
            id=property_id,
            total_rooms=total_rooms,
            availability=PropertyAvailability(
                start_of_availability=d(start) if start else None,
                end_of_availability=d(end) if end else None,
            ),
            **kwargs,
        )

    return _build


@pytest.fixture
def make_reservation() -> Callable[..., ReservationRecord]:
    """Build a ReservationRecord from ISO strings."""

    def _build(
        unit_id: str | None = "R1",
        check_in: str | None = None,
        check_out: str | None = None,
        status: str = "Confirmada",
        reservation_id: str | None = None,
    ) -> ReservationRecord:
        return ReservationRecord(
            id=reservation_id,
            unit_id=unit_id,
            check_in=d(check_in) if check_in else None,
            check_out=d(check_out) if check_out else None,
            status=status,
        )

    return _build
