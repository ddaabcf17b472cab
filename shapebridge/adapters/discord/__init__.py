"""Discord platform adapter."""

from shapebridge.adapters.discord.adapter import DiscordChatAdapter, ShapeBridgeBot

__all__ = ["DiscordChatAdapter", "ShapeBridgeBot"]
