"""In-memory list cache implementation.

Entries live in an insertion-ordered dict with monotonic expiry times.
Suitable for single-process deployments; each replica keeps its own cache,
which is acceptable because entries expire within seconds.

Every ``invalidate_prefix`` bumps that prefix's generation. A key's
generation is the sum over the prefixes covering it, so a page computed
before an invalidation carries an old generation and ``set`` refuses it.

Safe for concurrent coroutines within a single event loop via asyncio.Lock.
"""

from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from typing import Any, Optional

from lorekeeper.core.logging import logger


class InMemoryListCache:
    """In-memory implementation of the ListCache protocol.

    Attributes:
        ttl_seconds: Lifetime of an entry.
        max_entries: Capacity; the oldest entry is evicted beyond it.
    """

    DEFAULT_TTL_SECONDS = 30.0
    DEFAULT_MAX_ENTRIES = 500

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Seconds an entry stays valid. Defaults to 30 seconds.
            max_entries: Maximum number of entries. Defaults to 500.
        """
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        # key → (expires_at, value)
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        # prefix → number of invalidations
        self._generations: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[Any]:
        """Return a live entry, dropping it if it has expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def generation(self, key: str) -> int:
        """Sum of the generations of every prefix covering ``key``."""
        async with self._lock:
            return self._generation_of(key)

    async def set(self, key: str, value: Any, *, generation: Optional[int] = None) -> bool:
        """Store an entry unless it is stale, evicting the oldest ones past capacity."""
        async with self._lock:
            if generation is not None and generation != self._generation_of(key):
                logger.debug(f"[ListCache] Dropped stale page for '{key}'")
                return False
            self._entries.pop(key, None)
            self._entries[key] = (time.monotonic() + self._ttl, value)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
            return True

    async def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry under ``prefix`` and bump its generation."""
        async with self._lock:
            self._generations[prefix] = self._generations.get(prefix, 0) + 1
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for k in doomed:
                del self._entries[k]
        if doomed:
            logger.debug(f"[ListCache] Invalidated {len(doomed)} entries under '{prefix}'")
        return len(doomed)

    def _generation_of(self, key: str) -> int:
        return sum(n for prefix, n in self._generations.items() if key.startswith(prefix))

    def __len__(self) -> int:
        """Number of stored entries, expired ones included."""
        return len(self._entries)
