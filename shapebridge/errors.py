"""Error taxonomy for the bridge."""

from typing import Optional


class ShapeBridgeError(Exception):
    """Base class for bridge errors"""
    pass


class ConfigError(ShapeBridgeError):
    """Raised when a required setting is missing or invalid"""
    pass


class PersistenceError(ShapeBridgeError):
    """Raised when the channel state file is malformed or unwritable"""
    pass


class TransportError(ShapeBridgeError):
    """Raised for provider failures other than timeout and rate limiting"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
