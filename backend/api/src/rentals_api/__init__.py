"""REST API for rental property availability search."""

__version__ = "0.1.0"
