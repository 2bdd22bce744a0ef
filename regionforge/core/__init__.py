"""Core types and exceptions for regionforge.

This module provides the stage enum and the exception hierarchy used
throughout the library.
"""

from .types import Stage

from .errors import (
    RegionforgeError,
    ConfigurationError,
    RegionTypeError,
    ValidationError,
)

__all__ = [
    # Enums
    'Stage',

    # Exceptions
    'RegionforgeError',
    'ConfigurationError',
    'RegionTypeError',
    'ValidationError',
]
