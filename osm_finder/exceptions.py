"""Custom exceptions for the osm-business-finder library."""

from typing import Optional


class FinderError(Exception):
    """Base exception for all osm-business-finder errors."""
    pass


class InvalidInputError(FinderError, ValueError):
    """Raised when a search is requested with unusable input (empty place, bad radius, unknown category)."""
    pass


class PlaceNotFoundError(FinderError):
    """Raised when Nominatim returns no candidates for a place name."""

    def __init__(self, place: str):
        self.place = place
        super().__init__(f"Place not found: {place}")


class UpstreamError(FinderError):
    """Raised when Nominatim or Overpass cannot be reached or answers with an error."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.status_code = status_code
        detail = f"{service} error"
        if status_code is not None:
            detail += f" (HTTP {status_code})"
        super().__init__(f"{detail}: {message}")


class ConfigurationError(FinderError):
    """Raised when configuration is invalid or incomplete."""
    pass
