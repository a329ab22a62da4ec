"""List cache adapters."""

from lorekeeper.adapters.list_cache.fake import FakeListCache
from lorekeeper.adapters.list_cache.in_memory import InMemoryListCache

__all__ = ["InMemoryListCache", "FakeListCache"]
