"""Domain layer — pure Python, no framework dependencies."""

from shapebridge.domain.activation import ChannelActivationStore
from shapebridge.domain.commands import COMMANDS, CommandKind, CommandSpec, ParsedCommand, parse_command
from shapebridge.domain.formatter import ResponseFormatter
from shapebridge.domain.media import MediaUrlExtractor, classify, extract_urls
from shapebridge.domain.models import (
    EmbedsOnly,
    FormattedReply,
    ImageEmbed,
    MediaKind,
    ReplyStatus,
    ShapeReply,
    TextOnly,
    TextWithEmbeds,
)
from shapebridge.domain.router import CommandRouter

__all__ = [
    "ChannelActivationStore",
    "COMMANDS",
    "CommandKind",
    "CommandSpec",
    "ParsedCommand",
    "parse_command",
    "ResponseFormatter",
    "MediaUrlExtractor",
    "classify",
    "extract_urls",
    "EmbedsOnly",
    "FormattedReply",
    "ImageEmbed",
    "MediaKind",
    "ReplyStatus",
    "ShapeReply",
    "TextOnly",
    "TextWithEmbeds",
    "CommandRouter",
]
