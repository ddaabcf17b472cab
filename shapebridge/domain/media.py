"""Media URL discovery in provider text.

Pure Python, no framework dependencies. Image validation is delegated to an
ImageProbePort so the network check can be swapped or disabled.
"""

from __future__ import annotations

import re
import sys
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import urlsplit

from shapebridge.domain.models import CandidateUrl, MediaKind

if TYPE_CHECKING:
    from shapebridge.ports.outbound import ImageProbePort


def _log(msg: str):
    print(msg, file=sys.stderr)


# Permissive scheme + host + path pattern; the scheme is optional.
URL_RE = re.compile(
    r"(?<![\w@./-])"
    r"(?:https?://)?"
    r"(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}"
    r"(?::\d{1,5})?"
    r"(?:[/?#][^\s<>\"'`]*)?",
    re.IGNORECASE,
)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".,;:!?'\"*_~"

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg", ".tiff", ".ico")
VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov", ".avi", ".mkv", ".flv")
AUDIO_EXTENSIONS = (".mp3", ".ogg", ".wav", ".m4a", ".aac", ".flac")

# Hosts that serve images from extensionless paths.
IMAGE_HOSTS = (
    "imgur.com",
    "i.imgur.com",
    "cdn.discordapp.com",
    "media.discordapp.net",
    "i.redd.it",
    "preview.redd.it",
)


def _trim_match(text: str) -> str:
    """Drop sentence punctuation the pattern swallowed at the end of a URL."""
    while text:
        last = text[-1]
        if last in _TRAILING_PUNCTUATION:
            text = text[:-1]
        elif last == ")" and text.count("(") < text.count(")"):
            text = text[:-1]
        else:
            break
    return text


def unwrap(text: str) -> str:
    """Strip whitespace and one pair of surrounding angle brackets."""
    text = text.strip()
    if text.startswith("<") and text.endswith(">"):
        return text[1:-1].strip()
    return text


def normalize_url(text: str) -> Optional[str]:
    """Return an absolute http(s) URL for ``text`` or None if it does not parse."""
    candidate = unwrap(text)
    if not candidate:
        return None
    if not _SCHEME_RE.match(candidate):
        candidate = "https://" + candidate
    try:
        parts = urlsplit(candidate)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        return None
    if "." not in parts.hostname:
        return None
    return candidate


def _host_matches(hostname: str, hosts: Iterable[str]) -> bool:
    hostname = hostname.lower()
    return any(hostname == host or hostname.endswith("." + host) for host in hosts)


def classify(url: str, image_hosts: Iterable[str] = IMAGE_HOSTS) -> MediaKind:
    """Determine the media kind of an absolute URL from its path suffix or host."""
    if not isinstance(url, str):
        return MediaKind.NONE
    candidate = unwrap(url)
    if not _SCHEME_RE.match(candidate):
        return MediaKind.NONE
    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        _log(f"[Media Type] Error parsing URL {url!r}: {e}")
        return MediaKind.NONE
    if not parts.hostname:
        return MediaKind.NONE

    path = parts.path.lower()
    if path.endswith(IMAGE_EXTENSIONS):
        return MediaKind.IMAGE
    if path.endswith(VIDEO_EXTENSIONS):
        return MediaKind.VIDEO
    if path.endswith(AUDIO_EXTENSIONS):
        return MediaKind.AUDIO
    if _host_matches(parts.hostname, image_hosts):
        return MediaKind.IMAGE
    return MediaKind.NONE


def iter_url_spans(text: str) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(start, end, url)`` for every URL-shaped substring that parses.

    ``text[start:end]`` is the occurrence without trailing punctuation and
    ``url`` its normalized form.
    """
    if not text:
        return
    for match in URL_RE.finditer(text):
        raw = _trim_match(match.group(0))
        url = normalize_url(raw)
        if url is not None:
            yield match.start(), match.start() + len(raw), url


def find_candidates(text: str, image_hosts: Iterable[str] = IMAGE_HOSTS) -> List[CandidateUrl]:
    """Locate URL-shaped substrings, normalized and classified.

    Duplicates (by normalized URL) are dropped; first occurrence order is kept.
    """
    image_hosts = tuple(image_hosts)
    seen = set()
    found = []
    for start, end, url in iter_url_spans(text):
        raw = text[start:end]
        if url in seen:
            continue
        seen.add(url)
        found.append(CandidateUrl(text=raw, url=url, kind=classify(url, image_hosts)))
    return found


def extract_urls(text: str) -> List[str]:
    return [candidate.url for candidate in find_candidates(text)]


class MediaUrlExtractor:
    """Finds media URLs in free text and confirms image URLs with a live probe.

    Without a probe, every URL classified as an image is accepted.
    """

    def __init__(
        self,
        probe: Optional[ImageProbePort] = None,
        image_hosts: Iterable[str] = IMAGE_HOSTS,
    ):
        self._probe = probe
        self._image_hosts = tuple(image_hosts)

    def extract_urls(self, text: str) -> List[str]:
        return [candidate.url for candidate in self.find_candidates(text)]

    def find_candidates(self, text: str) -> List[CandidateUrl]:
        return find_candidates(text, self._image_hosts)

    def classify(self, url: str) -> MediaKind:
        return classify(url, self._image_hosts)

    async def validate_image(self, url: str) -> bool:
        """True only if the probe confirms an image. Never raises."""
        if self._probe is None:
            return True
        try:
            return bool(await self._probe.is_image(url))
        except Exception as e:
            _log(f"[URL Validation] Failed to validate {url}: {e}")
            return False
