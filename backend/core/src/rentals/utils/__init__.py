"""Utility helpers shared by the rentals services."""

from .dates import add_days, enumerate_days, iter_days, nights_between, parse_strict_date, to_iso
from .logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_search_operation,
    set_correlation_id,
)

__all__ = [
    "add_days",
    "enumerate_days",
    "iter_days",
    "nights_between",
    "parse_strict_date",
    "to_iso",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "log_search_operation",
    "set_correlation_id",
]
