"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

TIMEOUT_MESSAGE = "Sorry, the request to the Shape timed out."
RATE_LIMIT_MESSAGE = "Too many requests to the Shapes API. Please try again later."


class MediaKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    NONE = "none"


@dataclass(frozen=True)
class CandidateUrl:
    """A URL found in provider text.

    ``text`` is the substring as it appeared (without angle brackets),
    ``url`` the normalized absolute form.
    """

    text: str
    url: str
    kind: MediaKind = MediaKind.NONE


@dataclass(frozen=True)
class ImageEmbed:
    url: str


@dataclass(frozen=True)
class TextOnly:
    text: str

    @property
    def content(self) -> Optional[str]:
        return self.text

    @property
    def embeds(self) -> List[ImageEmbed]:
        return []


@dataclass(frozen=True)
class EmbedsOnly:
    embeds: List[ImageEmbed] = field(default_factory=list)

    @property
    def content(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class TextWithEmbeds:
    text: str
    embeds: List[ImageEmbed] = field(default_factory=list)

    @property
    def content(self) -> Optional[str]:
        return self.text


FormattedReply = Union[TextOnly, EmbedsOnly, TextWithEmbeds]


def to_payload(reply: FormattedReply) -> dict:
    """Render a reply as the platform-neutral ``{content?, embeds?}`` payload."""
    payload = {}
    if reply.content is not None:
        payload["content"] = reply.content
    if reply.embeds:
        payload["embeds"] = [{"image": {"url": embed.url}} for embed in reply.embeds]
    return payload


class ReplyStatus(Enum):
    OK = "ok"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    FAILURE = "failure"


_SENTINEL_TEXT = {
    ReplyStatus.TIMEOUT: TIMEOUT_MESSAGE,
    ReplyStatus.RATE_LIMITED: RATE_LIMIT_MESSAGE,
}


@dataclass(frozen=True)
class ShapeReply:
    """Outcome of one provider call."""

    status: ReplyStatus
    text: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, text: str) -> "ShapeReply":
        return cls(ReplyStatus.OK, text=text or "")

    @classmethod
    def timeout(cls) -> "ShapeReply":
        return cls(ReplyStatus.TIMEOUT)

    @classmethod
    def rate_limited(cls) -> "ShapeReply":
        return cls(ReplyStatus.RATE_LIMITED)

    @classmethod
    def failure(cls, error: BaseException) -> "ShapeReply":
        return cls(ReplyStatus.FAILURE, error=error)

    @property
    def is_sentinel(self) -> bool:
        return self.status in _SENTINEL_TEXT

    @property
    def sentinel_text(self) -> Optional[str]:
        return _SENTINEL_TEXT.get(self.status)

    @property
    def is_empty(self) -> bool:
        return self.status is ReplyStatus.OK and not self.text.strip()


@dataclass(frozen=True)
class ActivateResult:
    already: bool


@dataclass(frozen=True)
class DeactivateResult:
    was_active: bool
