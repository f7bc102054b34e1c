"""History store - bounded, newest-first record of generated assets."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from ..config import HISTORY_KEY, HISTORY_LIMIT
from ..models.history import HistoryItem

logger = logging.getLogger(__name__)


class HistoryStore:
    """JSON-file-backed history with an in-memory mirror.

    The file holds a single namespaced key whose value is the flat list of
    records, newest first. Every write replaces the file atomically, so reads
    after a successful append/clear always see that write, also across restarts.
    """

    def __init__(self, path: str | Path, limit: int | None = HISTORY_LIMIT, key: str = HISTORY_KEY):
        if limit is not None and limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self.path = Path(path)
        self.limit = limit
        self.key = key
        self._lock = threading.Lock()
        self._items: list[HistoryItem] = self._load()

    def append(self, item: HistoryItem) -> None:
        """Insert at the front, evicting the oldest items past the limit."""
        with self._lock:
            items = [item] + self._items
            if self.limit is not None:
                evicted = items[self.limit:]
                items = items[:self.limit]
                for old in evicted:
                    logger.info(f"History full, evicting {old.type.value} {old.id}")
            self._write(items)
            self._items = items

    def _load(self) -> list[HistoryItem]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            records = data.get(self.key, []) if isinstance(data, dict) else []
            items = [HistoryItem.from_dict(record) for record in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Failed to read history from {self.path}, starting empty: {e}")
            return []

        if self.limit is not None:
            items = items[:self.limit]
        return items

    def _write(self, items: list[HistoryItem]) -> None:
        """Write to a temp file in the same directory, then replace."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {self.key: [item.to_dict() for item in items]}

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def list(self) -> list[HistoryItem]:
        """Items newest first. Returns a copy; safe to iterate while appending."""
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        """Remove every item. Callers confirm with the user before calling this."""
        with self._lock:
            self._write([])
            self._items = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
