"""Inbound port — platform-agnostic message representation."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class IncomingMessage:
    """One user message as delivered by the chat platform.

    Identifiers are opaque strings; the platform adapter converts its native ids.
    """

    content: str
    channel_id: str
    author_name: str
    author_id: str
    is_self: bool = False
    is_bot: bool = False
    message_id: Optional[str] = None
