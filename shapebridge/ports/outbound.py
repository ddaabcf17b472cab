"""Outbound ports — interfaces for external system adapters."""

from typing import Iterable, Optional, Protocol, Set, runtime_checkable

from shapebridge.domain.models import FormattedReply, ShapeReply


@runtime_checkable
class ProviderPort(Protocol):
    """Interface for the Shapes completions endpoint."""

    async def send(self, user_id: str, channel_id: str, content: str) -> ShapeReply: ...


@runtime_checkable
class ChannelStoragePort(Protocol):
    """Interface for persisting the set of active channel ids.

    load() raises PersistenceError on malformed content and returns an
    empty set when nothing has been stored yet.
    """

    def load(self) -> Set[str]: ...
    def save(self, channels: Iterable[str]) -> None: ...


@runtime_checkable
class ImageProbePort(Protocol):
    """Interface for checking that a URL serves an image."""

    async def is_image(self, url: str) -> bool: ...


@runtime_checkable
class ChatPort(Protocol):
    """Interface for sending replies back to chat channels."""

    async def send(
        self,
        channel_id: str,
        reply: FormattedReply,
        reply_to: Optional[str] = None,
    ) -> None: ...

    async def send_typing(self, channel_id: str) -> None: ...
