"""Workspace import integration tests.

Validates that both workspace packages (rentals, rentals_api) are correctly
installable and their public interfaces are accessible.
"""


class TestCorePackageImports:
    """Tests for the rentals package public interface."""

    def test_can_import_core_package(self):
        """Core package should be importable."""
        import rentals

        assert hasattr(rentals, "__version__")

    def test_can_import_models(self):
        """All public models should be importable from rentals.models."""
        from rentals.models import (
            AvailabilityEvaluation,
            AvailabilityMetadata,
            ErrorCode,
            PropertyAvailability,
            PropertyCandidate,
            PropertyListing,
            RentalsError,
            RequestedWindow,
            ReservationRecord,
            ReservationStatus,
            RoomListing,
            ToolError,
        )

        assert AvailabilityEvaluation is not None
        assert AvailabilityMetadata is not None
        assert ErrorCode is not None
        assert PropertyAvailability is not None
        assert PropertyCandidate is not None
        assert PropertyListing is not None
        assert RentalsError is not None
        assert RequestedWindow is not None
        assert ReservationRecord is not None
        assert ReservationStatus is not None
        assert RoomListing is not None
        assert ToolError is not None

    def test_can_import_services(self):
        """Services should be importable from rentals.services."""
        from rentals.services import (
            AvailabilityService,
            PropertySearchService,
            RoomCatalogService,
            SSMService,
            ZohoClient,
            evaluate_availability,
        )

        assert callable(evaluate_availability)
        assert AvailabilityService is not None
        assert PropertySearchService is not None
        assert RoomCatalogService is not None
        assert SSMService is not None
        assert ZohoClient is not None

    def test_can_import_utils(self):
        """Utilities should be importable from rentals.utils."""
        from rentals.utils import enumerate_days, get_logger, parse_strict_date

        assert callable(enumerate_days)
        assert callable(get_logger)
        assert callable(parse_strict_date)


class TestApiPackageImports:
    """Tests for the rentals_api package public interface."""

    def test_can_import_api_package(self):
        """API package should be importable."""
        import rentals_api

        assert hasattr(rentals_api, "__version__")

    def test_api_main_app_exists(self):
        """API main module should export FastAPI app and Lambda handler."""
        from fastapi import FastAPI

        from rentals_api.main import app, handler

        assert isinstance(app, FastAPI)
        assert handler is not None

    def test_api_uses_core_models(self):
        """Response models should build on core models."""
        from rentals.services.property_search import PropertySearchResult
        from rentals_api.models import PropertySearchResponse

        assert issubclass(PropertySearchResponse, PropertySearchResult)
