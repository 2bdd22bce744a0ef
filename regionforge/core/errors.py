"""Exception hierarchy for regionforge.

Geometry engine failures (``shapely.errors.GEOSException``) are not wrapped;
they propagate to the caller as-is.
"""

from typing import Optional


class RegionforgeError(Exception):
    """Base class for all regionforge errors."""


class ConfigurationError(RegionforgeError, ValueError):
    """Raised when pipeline parameters are out of range."""


class RegionTypeError(RegionforgeError, TypeError):
    """Raised when a region id or geometry has an unsupported type."""

    def __init__(self, message: str, region_id: Optional[object] = None):
        super().__init__(message)
        self.region_id = region_id


class ValidationError(RegionforgeError):
    """Raised when an input region geometry is not valid."""

    def __init__(self, region_id: str, reason: str):
        super().__init__(f"Region {region_id!r} has invalid geometry: {reason}")
        self.region_id = region_id
        self.reason = reason


__all__ = [
    'RegionforgeError',
    'ConfigurationError',
    'RegionTypeError',
    'ValidationError',
]
