"""Discord adapter — bridges discord.Client to CommandRouter.

ShapeBridgeBot converts discord.Message to IncomingMessage and delegates to
the router; DiscordChatAdapter renders FormattedReply back into Discord
messages with image embeds.
"""

import sys
import traceback
from typing import Any, Dict, List, Optional

import discord

from shapebridge.domain.activation import ChannelActivationStore
from shapebridge.domain.models import FormattedReply, to_payload
from shapebridge.domain.router import CommandRouter
from shapebridge.ports.inbound import IncomingMessage

MAX_MESSAGE_LENGTH = 2000
MAX_EMBEDS_PER_MESSAGE = 10


def _log(msg: str):
    print(msg, file=sys.stderr)


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Split a message into chunks that fit Discord's character limit."""
    if len(text) <= limit:
        return [text]
    chunks = []
    while text:
        chunks.append(text[:limit])
        text = text[limit:]
    return chunks


def build_messages(reply: FormattedReply) -> List[Dict[str, Any]]:
    """Keyword arguments for each ``channel.send`` call needed to deliver ``reply``.

    Built from the ``{content?, embeds?}`` payload. Embeds ride on the last
    text chunk; overflow embeds get their own messages.
    """
    payload = to_payload(reply)
    content = payload.get("content")
    messages: List[Dict[str, Any]] = [
        {"content": chunk} for chunk in split_message(content)
    ] if content else []

    embeds = [
        discord.Embed.from_dict(embed) for embed in payload.get("embeds", [])
    ]
    batches = [
        embeds[i:i + MAX_EMBEDS_PER_MESSAGE]
        for i in range(0, len(embeds), MAX_EMBEDS_PER_MESSAGE)
    ]
    if batches:
        if messages:
            messages[-1]["embeds"] = batches.pop(0)
        messages.extend({"embeds": batch} for batch in batches)
    return messages


class DiscordChatAdapter:
    """ChatPort implementation using discord.Client."""

    def __init__(self, client: discord.Client):
        self._client = client

    async def _resolve_channel(self, channel_id: str):
        channel = self._client.get_channel(int(channel_id))
        if channel is None:
            channel = await self._client.fetch_channel(int(channel_id))
        return channel

    async def send(
        self,
        channel_id: str,
        reply: FormattedReply,
        reply_to: Optional[str] = None,
    ) -> None:
        outgoing = build_messages(reply)
        if not outgoing:
            return
        channel = await self._resolve_channel(channel_id)
        if reply_to and hasattr(channel, "get_partial_message"):
            outgoing[0]["reference"] = channel.get_partial_message(int(reply_to))
        for kwargs in outgoing:
            await channel.send(**kwargs)

    async def send_typing(self, channel_id: str) -> None:
        channel = await self._resolve_channel(channel_id)
        await channel.typing()


class ShapeBridgeBot(discord.Client):
    """Thin Discord client that hands every message to the router."""

    def __init__(
        self,
        router: CommandRouter,
        store: Optional[ChannelActivationStore] = None,
        model_name: str = "",
        **discord_kwargs,
    ):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._router = router
        self._store = store
        self.model_name = model_name
        router.wire(DiscordChatAdapter(self))

    def _to_incoming(self, message: discord.Message) -> IncomingMessage:
        """Convert a Discord message to platform-agnostic IncomingMessage."""
        author = message.author
        return IncomingMessage(
            content=message.content or "",
            channel_id=str(message.channel.id),
            author_name=author.display_name or author.name or "Unknown User",
            author_id=str(author.id),
            is_self=bool(self.user) and author.id == self.user.id,
            is_bot=bool(author.bot),
            message_id=str(message.id),
        )

    async def on_ready(self):
        _log(f"[Discord] Bot logged in as {self.user}!")
        _log(
            f"[Discord] Ready to process messages for Shape: "
            f"{self._router.shape_name} (Model: {self.model_name})."
        )
        if self._store is not None:
            active = sorted(self._store.channels)
            _log(f"[Discord] Active channels on startup: {', '.join(active) or 'None'}")

    async def on_message(self, message: discord.Message):
        # Guard: self.user can be None before on_ready fires
        if not self.user:
            return
        incoming = self._to_incoming(message)
        try:
            await self._router.handle(incoming)
        except Exception as e:
            _log(f"[Discord] Unhandled error for message in channel {incoming.channel_id}: {e!r}")

    async def on_error(self, event_method: str, *args, **kwargs):
        _log(f"[Discord] An error occurred in {event_method}:\n{traceback.format_exc()}")

    async def close(self):
        if self._store is not None:
            await self._store.flush()
        await super().close()
