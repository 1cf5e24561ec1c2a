"""Content-addressable cache of merged reports."""

import hashlib
import json
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sql_review.domain import Dialect, Dimension, MergedReport


def fingerprint(sql: str, dialect: Dialect | str, dimensions: Iterable[Dimension | str]) -> str:
    """Stable key over the trimmed SQL, resolved dialect and sorted dimensions."""
    content = json.dumps(
        [sql.strip(), str(dialect), sorted(str(d) for d in dimensions)],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class CacheEntry:
    key: str
    value: MergedReport
    inserted_at: float


class FingerprintCache:
    """Thread-safe bounded cache with insertion-order eviction.

    When a new key would exceed ``max_size`` the oldest-inserted entry is
    dropped. Reads do not refresh an entry's position.
    """

    def __init__(self, max_size: int = 100) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> MergedReport | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def put(self, key: str, value: MergedReport) -> None:
        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self._max_size:
                oldest_key = next(iter(self._entries))
                del self._entries[oldest_key]
            self._entries[key] = CacheEntry(key=key, value=value, inserted_at=time.time())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total, 4) if total > 0 else 0.0,
                "max_size": self._max_size,
            }
