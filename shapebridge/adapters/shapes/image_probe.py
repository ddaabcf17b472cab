"""HEAD-based image URL probe using aiohttp — implements ImageProbePort."""

import asyncio
import sys

import aiohttp

from shapebridge.config import DEFAULT_IMAGE_PROBE_TIMEOUT


def _log(msg: str):
    print(msg, file=sys.stderr)


class HttpImageProbe:
    """Accepts a URL only if it answers 2xx with an ``image/*`` content type."""

    def __init__(self, timeout: float = DEFAULT_IMAGE_PROBE_TIMEOUT):
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def is_image(self, url: str) -> bool:
        try:
            async with aiohttp.ClientSession() as session:
                async with session.head(url, allow_redirects=True, timeout=self._timeout) as resp:
                    content_type = resp.headers.get("Content-Type", "")
                    valid = 200 <= resp.status < 300 and content_type.lower().startswith("image/")
                    _log(
                        f"[URL Validation] URL: {url}, Status: {resp.status}, "
                        f"Content-Type: {content_type or 'none'}, Valid: {valid}"
                    )
                    return valid
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            _log(f"[URL Validation] Failed to validate {url}: {e!r}")
            return False
