# services/cache/summary_cache.py
"""
"Last summary per URL" store.

Bounded (25 entries by default); when full, the entries with the oldest
timestamps are evicted first.  Lives in the service layer – the extraction
core itself is stateless.
"""

import threading
import time
from typing import Callable, Dict, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

DEFAULT_MAX_ENTRIES = 25


class CachedSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    summary: str
    meta: str = ""
    engine: Optional[str] = None
    ts: float


class SummaryCache:
    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, clock: Callable[[], float] = time.time):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, CachedSummary] = {}
        self._lock = threading.Lock()

    def put(self, url: str, summary: str, meta: str = "", engine: Optional[str] = None) -> CachedSummary:
        entry = CachedSummary(url=url, summary=summary, meta=meta, engine=engine, ts=self._clock())
        with self._lock:
            self._entries[url] = entry
            overflow = len(self._entries) - self.max_entries
            if overflow > 0:
                oldest = sorted(self._entries, key=lambda k: self._entries[k].ts)[:overflow]
                for key in oldest:
                    del self._entries[key]
                logger.debug(f"Summary cache evicted {overflow} entr{'y' if overflow == 1 else 'ies'}")
        return entry

    def get(self, url: str) -> Optional[CachedSummary]:
        with self._lock:
            return self._entries.get(url)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._entries
