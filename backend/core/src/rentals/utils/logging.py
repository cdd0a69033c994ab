"""Logging helpers that tag every record with the request's correlation ID.

The API middleware stores the ID in a ContextVar, so it follows the request
into worker threads started with ``run_in_threadpool`` and into the CRM
client. Records are rendered as ``[<id>] LEVEL logger: message`` locally and
as one JSON object per line on Lambda, where CloudWatch indexes the fields.

Usage:
    from rentals.utils.logging import get_logger, log_search_operation

    logger = get_logger(__name__)
    log_search_operation(logger, "evaluate", candidates=12, returned=9)
"""

import json
import logging
import os
import uuid
from contextvars import ContextVar
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"

# Search context attributes copied into JSON output when present on a record
SEARCH_FIELDS = (
    "operation",
    "check_in",
    "check_out",
    "candidates",
    "returned",
    "reservations",
    "fully_booked",
    "nights",
    "warning",
    "error",
)

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context.

    Args:
        correlation_id: ID received from the caller; a new one is generated
            when empty

    Returns:
        The ID now bound to the context
    """
    value = correlation_id or generate_correlation_id()
    _correlation_id.set(value)
    return value


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Stamps ``correlation_id`` on every record passing through."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter that leads with the correlation ID.

    With ``as_json`` the record is emitted as a JSON object holding the
    level, logger, message, correlation ID and any search context fields.
    """

    def __init__(self, fmt: str | None = None, *, as_json: bool = False) -> None:
        super().__init__(fmt)
        self.as_json = as_json

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is None:
            correlation_id = get_correlation_id() or NO_CORRELATION_ID
            record.correlation_id = correlation_id

        if not self.as_json:
            return f"[{correlation_id}] {super().format(record)}"

        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": correlation_id,
            "message": record.getMessage(),
        }
        for field in SEARCH_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger with a CorrelationIdFilter attached once."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger


def configure_logging(level: int = logging.INFO) -> None:
    """Install a correlation-aware stream handler on the root logger.

    JSON output is used when running on AWS Lambda. Does nothing when the
    root logger already has handlers (e.g. under pytest).
    """
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        StructuredFormatter(
            "%(levelname)s %(name)s: %(message)s",
            as_json=bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME")),
        )
    )
    root.addHandler(handler)


def log_search_operation(
    logger: logging.Logger,
    operation: str,
    *,
    check_in: str | None = None,
    check_out: str | None = None,
    candidates: int | None = None,
    returned: int | None = None,
    reservations: int | None = None,
    warning: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log one step of a property search.

    The level follows the outcome: ERROR when ``error`` is given, WARNING
    when ``warning`` is given, INFO otherwise. Context is attached to the
    record and also rendered as ``key=value`` pairs in the message.

    Args:
        logger: Logger instance
        operation: Step name (e.g., "fetch_reservations", "evaluate")
        check_in: Requested check-in date (ISO) if any
        check_out: Requested check-out date (ISO) if any
        candidates: Number of candidate properties considered
        returned: Number of properties returned after filtering
        reservations: Number of reservation records consulted
        warning: Description of a degraded result
        error: Error message if the step failed
        **extra: Additional context fields
    """
    fields: dict[str, Any] = {
        "check_in": check_in or None,
        "check_out": check_out or None,
        "candidates": candidates,
        "returned": returned,
        "reservations": reservations,
        "warning": warning or None,
        "error": error or None,
        **extra,
    }
    context: dict[str, Any] = {"operation": operation}
    context.update({key: value for key, value in fields.items() if value is not None})

    message = " | ".join(
        [f"Property search: {operation}"]
        + [f"{key}={value}" for key, value in context.items() if key != "operation"]
    )

    if error:
        level = logging.ERROR
    elif warning:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger.log(level, message, extra=context)
