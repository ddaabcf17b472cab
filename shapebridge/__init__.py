"""Shape Bridge — relays Discord channels to a Shapes persona."""

from shapebridge.config import BridgeConfig, __version__
from shapebridge.errors import ConfigError, PersistenceError, ShapeBridgeError, TransportError
from shapebridge.domain.activation import ChannelActivationStore
from shapebridge.domain.formatter import ResponseFormatter
from shapebridge.domain.media import MediaUrlExtractor
from shapebridge.domain.models import EmbedsOnly, ShapeReply, TextOnly, TextWithEmbeds
from shapebridge.domain.router import CommandRouter
from shapebridge.ports.inbound import IncomingMessage

__all__ = [
    "__version__",
    "BridgeConfig",
    "ConfigError",
    "PersistenceError",
    "ShapeBridgeError",
    "TransportError",
    "ChannelActivationStore",
    "ResponseFormatter",
    "MediaUrlExtractor",
    "EmbedsOnly",
    "ShapeReply",
    "TextOnly",
    "TextWithEmbeds",
    "CommandRouter",
    "IncomingMessage",
]
