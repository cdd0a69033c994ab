"""Rental property availability: date-window checks against CRM reservations."""

__version__ = "0.1.0"
