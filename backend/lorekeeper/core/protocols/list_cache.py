"""ListCache protocol for anonymous list pages.

Anonymous list traffic is the same few queries over and over. Services cache
the computed page under a key derived from the query parameters and drop
every key of a resource type whenever that type is written.

A write can land while a page is being computed. Every invalidation bumps a
generation counter, and a page is only stored if the generation it was
computed under is still current.

Usage:
    key = list_cache_key("tags", query.model_dump(mode="json"))
    page = await cache.get(key)
    if page is None:
        generation = await cache.generation(key)
        page = await compute()
        await cache.set(key, page, generation=generation)

    # On create/update/delete
    await cache.invalidate_prefix(list_cache_prefix("tags"))
"""

import hashlib
import json
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

# Prefix covering every cached list page of every resource type.
ALL_LISTS = ""


def list_cache_prefix(resource: str) -> str:
    """Prefix shared by every cached list page of a resource type."""
    return f"{resource}:list"


def list_cache_key(resource: str, params: Mapping[str, Any]) -> str:
    """Key for one anonymous list query.

    Parameters are serialized with sorted keys (None values dropped) so the
    same query always hashes to the same key.
    """
    canonical = json.dumps(
        {k: v for k, v in params.items() if v is not None}, sort_keys=True, default=str
    )
    digest = hashlib.sha1(canonical.encode()).hexdigest()
    return f"{list_cache_prefix(resource)}:{digest}"


@runtime_checkable
class ListCache(Protocol):
    """Bounded, time-limited cache of list pages.

    Implementations must never return an entry older than their TTL and
    must make ``invalidate_prefix`` effective before it returns, including
    for pages whose computation started before the invalidation.
    """

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired.

        Args:
            key: Cache key from ``list_cache_key``.
        """
        ...

    async def generation(self, key: str) -> int:
        """Current generation of ``key``.

        The value changes whenever a prefix covering ``key`` is invalidated.
        Read it before computing a page and hand it back to ``set``.

        Args:
            key: Cache key from ``list_cache_key``.
        """
        ...

    async def set(self, key: str, value: Any, *, generation: Optional[int] = None) -> bool:
        """Store a value, evicting the oldest entry when full.

        Args:
            key: Cache key from ``list_cache_key``.
            value: The computed page.
            generation: Generation read before computing ``value``. When it
                is no longer current the value is stale and is dropped.

        Returns:
            Whether the value was stored.
        """
        ...

    async def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with ``prefix``.

        Args:
            prefix: Usually ``list_cache_prefix(resource)``; ``ALL_LISTS``
                drops every page.

        Returns:
            Number of entries removed.
        """
        ...
