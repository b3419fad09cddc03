"""
Exception types for slippy_tiles.

The ``create`` style factories never raise, they return ``None`` for
invalid input. These exceptions are raised when a value type is constructed
directly with invalid fields, and by the configuration loader.
"""

from typing import Any, Optional


class SlippyTilesError(ValueError):
    """Base error for invalid slippy map values."""

    def __init__(self, message: str, value: Optional[Any] = None):
        self.value = value
        super().__init__(message)

    def __str__(self):
        base = super().__str__()
        if self.value is not None:
            return f"{base} (got {self.value!r})"
        return base


class InvalidLatLonError(SlippyTilesError):
    """Latitude or longitude outside the valid range."""

    pass


class InvalidBBoxError(SlippyTilesError):
    """A bounding box edge outside the valid range."""

    pass


class InvalidTileError(SlippyTilesError):
    """Zoom or tile coordinates outside the valid range."""

    pass


class InvalidMetatileError(SlippyTilesError):
    """Bad metatile scale, zoom or coordinates."""

    pass


class ConfigError(SlippyTilesError):
    """Bad value in the environment configuration."""

    pass
