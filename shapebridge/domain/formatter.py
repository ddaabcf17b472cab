"""Provider reply → platform reply.

Confirmed image URLs become embeds and are removed from the text. Video and
audio links stay inline because the platform embeds plain media links itself.
"""

import asyncio
import re
import sys
from typing import List

from shapebridge.domain.media import MediaUrlExtractor, iter_url_spans
from shapebridge.domain.models import (
    CandidateUrl,
    EmbedsOnly,
    FormattedReply,
    ImageEmbed,
    MediaKind,
    TextOnly,
    TextWithEmbeds,
)


def _log(msg: str):
    print(msg, file=sys.stderr)


_BLANK_RUN_RE = re.compile(r"\n{3,}")
_SPACE_RUN_RE = re.compile(r"[ \t]{2,}")


def strip_urls(text: str, candidates: List[CandidateUrl]) -> str:
    """Remove each occurrence of a candidate URL (with optional ``<...>`` wrapping).

    Only whole URL occurrences whose normalized form is a candidate are cut;
    other URLs that merely contain a candidate's text are left intact. Lines
    emptied by the removal are dropped; leftover blank runs collapse to one
    blank line.
    """
    if not candidates:
        return text.strip()
    targets = {c.url for c in candidates}
    lines = []
    for line in text.split("\n"):
        pieces = []
        cursor = 0
        for start, end, url in iter_url_spans(line):
            if url not in targets:
                continue
            if line[start - 1:start] == "<" and line[end:end + 1] == ">":
                start, end = start - 1, end + 1
            pieces.append(line[cursor:start])
            cursor = end
        if not pieces:
            lines.append(line.rstrip())
            continue
        pieces.append(line[cursor:])
        stripped = "".join(pieces)
        if not stripped.strip():
            continue
        lines.append(_SPACE_RUN_RE.sub(" ", stripped).strip())
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()


class ResponseFormatter:
    """Turns raw shape replies into text, embeds, or both."""

    def __init__(self, extractor: MediaUrlExtractor):
        self._extractor = extractor

    async def format(self, raw_reply: str) -> FormattedReply:
        if not raw_reply or not raw_reply.strip():
            return TextOnly(raw_reply or "")

        candidates = self._extractor.find_candidates(raw_reply)
        images = [c for c in candidates if c.kind is MediaKind.IMAGE]
        verdicts = await asyncio.gather(
            *(self._extractor.validate_image(c.url) for c in images)
        )
        confirmed = [c for c, ok in zip(images, verdicts) if ok]
        for candidate, ok in zip(images, verdicts):
            if not ok:
                _log(f"[Format] Not embedding unverified image URL: {candidate.url}")

        if not confirmed:
            # Video/audio links stay inline; the platform embeds them from text.
            return TextOnly(raw_reply)

        embeds = [ImageEmbed(url=c.url) for c in confirmed]
        remaining = strip_urls(raw_reply, confirmed)
        if not remaining:
            return EmbedsOnly(embeds)
        return TextWithEmbeds(remaining, embeds)
