"""Unit tests for InMemoryListCache: expiry, capacity, invalidation and generations."""

import asyncio

import pytest

from lorekeeper.adapters.list_cache.in_memory import InMemoryListCache
from lorekeeper.core.protocols import ALL_LISTS, ListCache, list_cache_key, list_cache_prefix

KEY = "tags:list:abc"


class TestGetSet:
    @pytest.mark.asyncio
    async def test_miss_by_default(self):
        cache = InMemoryListCache()
        assert await cache.get(KEY) is None

    @pytest.mark.asyncio
    async def test_set_then_get(self):
        cache = InMemoryListCache()

        await cache.set(KEY, {"items": []})

        assert await cache.get(KEY) == {"items": []}

    @pytest.mark.asyncio
    async def test_satisfies_protocol(self):
        assert isinstance(InMemoryListCache(), ListCache)


class TestExpiry:
    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        cache = InMemoryListCache(ttl_seconds=0.05)
        await cache.set(KEY, "page")

        await asyncio.sleep(0.1)

        assert await cache.get(KEY) is None
        assert len(cache) == 0


class TestCapacity:
    @pytest.mark.asyncio
    async def test_oldest_entry_evicted(self):
        cache = InMemoryListCache(max_entries=2)

        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)

        assert await cache.get("a") is None
        assert await cache.get("b") == 2
        assert await cache.get("c") == 3

    @pytest.mark.asyncio
    async def test_rewrite_refreshes_position(self):
        cache = InMemoryListCache(max_entries=2)

        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("a", 10)
        await cache.set("c", 3)

        assert await cache.get("a") == 10
        assert await cache.get("b") is None


class TestInvalidatePrefix:
    @pytest.mark.asyncio
    async def test_drops_only_matching_resource(self):
        cache = InMemoryListCache()
        await cache.set(list_cache_key("tags", {"limit": 20}), "tags-page")
        await cache.set(list_cache_key("items", {"limit": 20}), "items-page")

        removed = await cache.invalidate_prefix(list_cache_prefix("tags"))

        assert removed == 1
        assert await cache.get(list_cache_key("tags", {"limit": 20})) is None
        assert await cache.get(list_cache_key("items", {"limit": 20})) == "items-page"


class TestGeneration:
    @pytest.mark.asyncio
    async def test_invalidation_bumps_covered_keys_only(self):
        cache = InMemoryListCache()
        tags_key = list_cache_key("tags", {})
        items_key = list_cache_key("items", {})
        before = await cache.generation(tags_key)

        await cache.invalidate_prefix(list_cache_prefix("tags"))

        assert await cache.generation(tags_key) != before
        assert await cache.generation(items_key) == 0

    @pytest.mark.asyncio
    async def test_page_computed_across_invalidation_is_dropped(self):
        cache = InMemoryListCache()
        generation = await cache.generation(KEY)

        await cache.invalidate_prefix(list_cache_prefix("tags"))
        stored = await cache.set(KEY, "stale-page", generation=generation)

        assert stored is False
        assert await cache.get(KEY) is None

    @pytest.mark.asyncio
    async def test_current_generation_is_stored(self):
        cache = InMemoryListCache()
        await cache.invalidate_prefix(list_cache_prefix("tags"))
        generation = await cache.generation(KEY)

        assert await cache.set(KEY, "page", generation=generation) is True
        assert await cache.get(KEY) == "page"

    @pytest.mark.asyncio
    async def test_invalidating_everything_covers_every_resource(self):
        cache = InMemoryListCache()
        await cache.set(list_cache_key("items", {}), "items-page")
        generation = await cache.generation(KEY)

        removed = await cache.invalidate_prefix(ALL_LISTS)

        assert removed == 1
        assert await cache.set(KEY, "page", generation=generation) is False


class TestCacheKey:
    def test_key_ignores_param_order_and_nones(self):
        a = list_cache_key("tags", {"limit": 20, "sortDir": "desc", "search": None})
        b = list_cache_key("tags", {"sortDir": "desc", "limit": 20})
        assert a == b

    def test_key_differs_per_query(self):
        assert list_cache_key("tags", {"limit": 20}) != list_cache_key("tags", {"limit": 10})

    def test_key_is_scoped_by_resource(self):
        assert list_cache_key("tags", {}).startswith("tags:list:")
