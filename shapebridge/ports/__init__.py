"""Port interfaces (Hexagonal Architecture)."""

from shapebridge.ports.inbound import IncomingMessage
from shapebridge.ports.outbound import ChannelStoragePort, ChatPort, ImageProbePort, ProviderPort

__all__ = [
    "IncomingMessage",
    "ChannelStoragePort",
    "ChatPort",
    "ImageProbePort",
    "ProviderPort",
]
