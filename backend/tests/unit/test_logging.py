"""Unit tests for correlation-aware logging helpers."""

import json
import logging

import pytest

from rentals.utils.logging import (
    CorrelationIdFilter,
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_search_operation,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def no_correlation_id():
    clear_correlation_id()
    yield
    clear_correlation_id()


def make_record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("rentals.test", logging.INFO, __file__, 1, message, None, None)


class TestCorrelationId:
    """Tests for correlation ID context management."""

    def test_set_generates_when_missing(self) -> None:
        correlation_id = set_correlation_id()

        assert correlation_id
        assert get_correlation_id() == correlation_id

    def test_set_keeps_given_value(self) -> None:
        assert set_correlation_id("req-1") == "req-1"
        assert get_correlation_id() == "req-1"

    def test_clear(self) -> None:
        set_correlation_id("req-1")
        clear_correlation_id()

        assert get_correlation_id() is None


class TestFormatting:
    """Tests for filter and formatter."""

    def test_filter_adds_placeholder(self) -> None:
        record = make_record()

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "no-correlation-id"  # type: ignore[attr-defined]

    def test_formatter_prefixes_correlation_id(self) -> None:
        set_correlation_id("req-42")

        output = StructuredFormatter("%(message)s").format(make_record("evaluated"))

        assert output == "[req-42] evaluated"

    def test_json_output_includes_search_fields(self) -> None:
        set_correlation_id("req-7")
        record = make_record("Property search: evaluate")
        record.operation = "evaluate"  # type: ignore[attr-defined]
        record.returned = 3  # type: ignore[attr-defined]

        payload = json.loads(StructuredFormatter(as_json=True).format(record))

        assert payload == {
            "level": "INFO",
            "logger": "rentals.test",
            "correlation_id": "req-7",
            "message": "Property search: evaluate",
            "operation": "evaluate",
            "returned": 3,
        }

    def test_get_logger_adds_filter_once(self) -> None:
        logger = get_logger("rentals.test.once")
        get_logger("rentals.test.once")

        assert sum(isinstance(f, CorrelationIdFilter) for f in logger.filters) == 1


class TestLogSearchOperation:
    """Tests for log_search_operation level selection."""

    def test_info_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("rentals.test.search")

        with caplog.at_level(logging.INFO, logger="rentals.test.search"):
            log_search_operation(logger, "evaluate", check_in="2025-03-01", returned=2)

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == (
            "Property search: evaluate | check_in=2025-03-01 | returned=2"
        )

    def test_warning_and_error(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("rentals.test.search")

        with caplog.at_level(logging.INFO, logger="rentals.test.search"):
            log_search_operation(logger, "fetch_reservations", warning="degraded")
            log_search_operation(logger, "fetch_properties", error="down")

        assert [r.levelno for r in caplog.records[-2:]] == [logging.WARNING, logging.ERROR]
