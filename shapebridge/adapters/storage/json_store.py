"""JSON file-based channel storage — implements ChannelStoragePort."""

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Set

from shapebridge.errors import PersistenceError


class JsonChannelStorage:
    """Stores active channel ids as a JSON array in a single file."""

    def __init__(self, path: str = "active_channels.json"):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Set[str]:
        if not self._path.exists():
            return set()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {self._path}: {e}") from e
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise PersistenceError(f"Invalid format in {self._path.name}: expected a list of channel ids")
        return set(raw)

    def save(self, channels: Iterable[str]) -> None:
        content = json.dumps(sorted(set(channels)), ensure_ascii=False, indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic write
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self._path.parent), suffix=".tmp",
            )
        except OSError as e:
            raise PersistenceError(f"Could not write {self._path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, str(self._path))
        except BaseException as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            if isinstance(e, OSError):
                raise PersistenceError(f"Could not write {self._path}: {e}") from e
            raise
