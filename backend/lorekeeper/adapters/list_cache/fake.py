"""Fake list cache for testing.

Stores entries without expiry and records every call so tests can assert
on cache hits, invalidations and stale writes.
"""

from typing import Any, Optional


class FakeListCache:
    """Test implementation of ListCache.

    Usage:
        fake = FakeListCache()
        await service.create(...)
        assert fake.invalidated == ["tags:list"]
    """

    def __init__(self) -> None:
        """Initialize with empty state."""
        self.entries: dict[str, Any] = {}
        self.hits: list[str] = []
        self.misses: list[str] = []
        self.invalidated: list[str] = []
        self.stale: list[str] = []

    async def get(self, key: str) -> Optional[Any]:
        """Return the stored entry and log hit or miss."""
        if key in self.entries:
            self.hits.append(key)
            return self.entries[key]
        self.misses.append(key)
        return None

    async def generation(self, key: str) -> int:
        """Number of recorded invalidations covering ``key``."""
        return sum(1 for prefix in self.invalidated if key.startswith(prefix))

    async def set(self, key: str, value: Any, *, generation: Optional[int] = None) -> bool:
        """Store the entry unless its generation is stale."""
        if generation is not None and generation != await self.generation(key):
            self.stale.append(key)
            return False
        self.entries[key] = value
        return True

    async def invalidate_prefix(self, prefix: str) -> int:
        """Drop matching entries and log the prefix."""
        self.invalidated.append(prefix)
        doomed = [k for k in self.entries if k.startswith(prefix)]
        for k in doomed:
            del self.entries[k]
        return len(doomed)

    def clear(self) -> None:
        """Reset all state."""
        self.entries.clear()
        self.hits.clear()
        self.misses.clear()
        self.invalidated.clear()
        self.stale.clear()
