"""Per-channel activation state.

The in-memory set is authoritative for the running process. Every mutation
is flushed to the storage port; when an event loop is running the write is
moved off the message path into a worker thread.
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING, Iterable, List, Optional, Set

from shapebridge.domain.models import ActivateResult, DeactivateResult
from shapebridge.errors import PersistenceError

if TYPE_CHECKING:
    from shapebridge.ports.outbound import ChannelStoragePort


def _log(msg: str):
    print(msg, file=sys.stderr)


class ChannelActivationStore:
    """Owns the set of channels whose traffic is forwarded to the shape."""

    def __init__(self, storage: ChannelStoragePort):
        self._storage = storage
        self._channels: Set[str] = set()
        self._write_lock: Optional[asyncio.Lock] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def channels(self) -> Set[str]:
        return set(self._channels)

    def load(self) -> Set[str]:
        """Load the persisted set, replacing in-memory state. Never raises."""
        try:
            loaded = set(self._storage.load())
        except PersistenceError as e:
            _log(f"[Channels] Warning: {e}. Starting with empty channels.")
            loaded = set()
        except Exception as e:
            _log(f"[Channels] Error loading active channels: {e}")
            loaded = set()
        self._channels = loaded
        if loaded:
            _log(f"[Channels] Active channels loaded: {', '.join(sorted(loaded))}")
        else:
            _log("[Channels] No active channels found. Starting with empty channels.")
        return set(loaded)

    def is_active(self, channel_id: str) -> bool:
        return channel_id in self._channels

    def activate(self, channel_id: str) -> ActivateResult:
        if channel_id in self._channels:
            return ActivateResult(already=True)
        self._channels.add(channel_id)
        _log(f"[Channels] Activated in channel: {channel_id}")
        self._schedule_persist()
        return ActivateResult(already=False)

    def deactivate(self, channel_id: str) -> DeactivateResult:
        if channel_id not in self._channels:
            return DeactivateResult(was_active=False)
        self._channels.discard(channel_id)
        _log(f"[Channels] Deactivated in channel: {channel_id}")
        self._schedule_persist()
        return DeactivateResult(was_active=True)

    def persist(self, channels: Optional[Iterable[str]] = None) -> bool:
        """Write ``channels`` (default: current state). Failure is logged, not raised."""
        snapshot = sorted(self._channels if channels is None else set(channels))
        try:
            self._storage.save(snapshot)
        except Exception as e:
            _log(f"[Channels] Error saving active channels: {e}")
            return False
        _log(f"[Channels] Active channels saved: {', '.join(snapshot) or 'None'}")
        return True

    async def flush(self) -> None:
        """Wait until every scheduled write has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _schedule_persist(self) -> None:
        snapshot = sorted(self._channels)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.persist(snapshot)
            return
        task = loop.create_task(self._persist_in_background(snapshot))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _persist_in_background(self, snapshot: List[str]) -> None:
        # Lock waiters resume in FIFO order, so the last snapshot is written last.
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        async with self._write_lock:
            await asyncio.to_thread(self.persist, snapshot)
