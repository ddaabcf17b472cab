"""Storage adapters."""

from shapebridge.adapters.storage.json_store import JsonChannelStorage

__all__ = ["JsonChannelStorage"]
