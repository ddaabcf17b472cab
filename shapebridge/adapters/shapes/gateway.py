"""Shapes completions client using aiohttp — implements ProviderPort."""

import asyncio
import sys
from typing import Any, Dict, Optional

import aiohttp

from shapebridge.config import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SHAPES_API_BASE_URL,
    SHAPES_MODEL_NAMESPACE,
)
from shapebridge.domain.models import ShapeReply
from shapebridge.errors import TransportError


def _log(msg: str):
    print(msg, file=sys.stderr)


class ShapeGateway:
    """Sends one user turn to a shape and classifies the outcome.

    Timeouts and HTTP 429 come back as sentinel statuses; any other transport
    or HTTP failure comes back as a FAILURE carrying a TransportError.
    """

    def __init__(
        self,
        api_key: str,
        shape_username: str,
        base_url: str = DEFAULT_SHAPES_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self._api_key = api_key
        self.model = f"{SHAPES_MODEL_NAMESPACE}/{shape_username}"
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def url(self) -> str:
        return self._url

    def _headers(self, user_id: str, channel_id: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-User-Id": str(user_id),
            "X-Channel-Id": str(channel_id),
        }

    @staticmethod
    def extract_text(data: Any) -> Optional[str]:
        """Text of the first choice, "" when there are no choices, None if malformed."""
        if not isinstance(data, dict):
            return None
        choices = data.get("choices")
        if not choices:
            return ""
        first = choices[0] if isinstance(choices, list) else None
        if not isinstance(first, dict) or not isinstance(first.get("message"), dict):
            return None
        content = first["message"].get("content")
        if content is None:
            return ""
        return content if isinstance(content, str) else None

    async def send(self, user_id: str, channel_id: str, content: str) -> ShapeReply:
        _log(
            f"[Shapes API] Sending message to {self.model}: User {user_id}, "
            f"Channel {channel_id}, Content: {content[:80]!r}"
        )
        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": content}],
        }
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._url,
                    json=body,
                    headers=self._headers(user_id, channel_id),
                    timeout=self._timeout,
                ) as resp:
                    if resp.status == 429:
                        _log("[Shapes API] Rate limited (HTTP 429)")
                        return ShapeReply.rate_limited()
                    if resp.status >= 400:
                        detail = await resp.text()
                        _log(f"[Shapes API] Error during communication (HTTP {resp.status}): {detail[:200]}")
                        return ShapeReply.failure(TransportError(
                            f"Shapes API failed (HTTP {resp.status}): {detail[:200]}",
                            status=resp.status,
                        ))
                    data = await resp.json(content_type=None)
        except asyncio.TimeoutError:
            _log(f"[Shapes API] Request timed out after {self._timeout.total:.0f}s")
            return ShapeReply.timeout()
        except (aiohttp.ClientError, ValueError) as e:
            _log(f"[Shapes API] Error during communication: {e!r}")
            return ShapeReply.failure(TransportError(f"Shapes API request failed: {e}"))

        text = self.extract_text(data)
        if text is None:
            _log(f"[Shapes API] Unexpected response structure: {str(data)[:200]}")
            return ShapeReply.failure(TransportError("Unexpected response structure from Shapes API"))
        if not text:
            _log("[Shapes API] Empty choices in response")
        else:
            _log(f"[Shapes API] Response received: {text[:80]!r}")
        return ShapeReply.ok(text)
