"""
Tests for core/cache.py.
"""

import asyncio

import pytest

from company_directory.app.core.cache import (
    ResultCache,
    build_item_key,
    build_list_key,
    list_namespace,
)


class TestCacheKeys:
    """Key construction."""

    def test_list_key_is_deterministic(self):
        first = build_list_key("location", "par", "city", 1, 10)
        second = build_list_key("location", "par", "city", 1, 10)
        assert first == second
        assert first.startswith(list_namespace("location"))

    def test_every_parameter_changes_the_key(self):
        base = build_list_key("location", "par", "city", 1, 10)
        assert build_list_key("location", "lyo", "city", 1, 10) != base
        assert build_list_key("location", "par", "id", 1, 10) != base
        assert build_list_key("location", "par", "city", 2, 10) != base
        assert build_list_key("location", "par", "city", 1, 20) != base
        assert build_list_key("service", "par", "city", 1, 10) != base

    def test_absent_and_empty_search_differ(self):
        assert build_list_key("worker", None, None, 1, 10) != build_list_key("worker", "", None, 1, 10)

    def test_filters_are_part_of_the_key(self):
        plain = build_list_key("worker", None, None, 1, 10)
        filtered = build_list_key("worker", None, None, 1, 10, {"location_id": 3})
        assert plain != filtered
        assert build_list_key("worker", None, None, 1, 10, {"location_id": None}) == plain

    def test_filter_order_does_not_matter(self):
        first = build_list_key("worker", None, None, 1, 10, {"location_id": 1, "service_id": 2})
        second = build_list_key("worker", None, None, 1, 10, {"service_id": 2, "location_id": 1})
        assert first == second

    def test_item_key(self):
        assert build_item_key("Worker", 42) == "worker:item:42"
        assert not build_item_key("worker", 42).startswith(list_namespace("worker"))


class TestResultCache:
    """Storage, expiry and invalidation."""

    @pytest.mark.asyncio
    async def test_set_then_get(self):
        cache = ResultCache()
        await cache.set("k", {"a": 1})
        assert await cache.try_get("k") == {"a": 1}
        assert await cache.try_get("missing") is None

    @pytest.mark.asyncio
    async def test_entries_expire(self):
        cache = ResultCache()
        await cache.set("k", "v", ttl=0.01)
        await asyncio.sleep(0.05)
        assert await cache.try_get("k") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_disabled_cache_still_honours_explicit_ttl(self):
        cache = ResultCache(default_ttl=-5)
        await cache.set("k", "v", ttl=60)
        assert await cache.try_get("k") == "v"

    @pytest.mark.asyncio
    async def test_non_positive_ttl_is_not_stored(self):
        cache = ResultCache(default_ttl=0)
        await cache.set("k", "v")
        assert await cache.try_get("k") is None
        await cache.set("k", "v", ttl=-1)
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        cache = ResultCache()
        value = {"items": [1, 2]}
        await cache.set("k", value)
        value["items"].append(3)
        cached = await cache.try_get("k")
        assert cached == {"items": [1, 2]}
        cached["items"].clear()
        assert await cache.try_get("k") == {"items": [1, 2]}

    @pytest.mark.asyncio
    async def test_remove(self):
        cache = ResultCache()
        await cache.set("k", "v")
        assert await cache.remove("k") is True
        assert await cache.remove("k") is False

    @pytest.mark.asyncio
    async def test_remove_by_prefix_leaves_other_namespaces(self):
        cache = ResultCache()
        await cache.set(build_list_key("location", None, None, 1, 10), "l1")
        await cache.set(build_list_key("location", "x", None, 1, 10), "l2")
        await cache.set(build_item_key("location", 1), "item")
        await cache.set(build_list_key("service", None, None, 1, 10), "s1")

        removed = await cache.remove_by_prefix(list_namespace("location"))

        assert removed == 2
        assert await cache.try_get(build_item_key("location", 1)) == "item"
        assert await cache.try_get(build_list_key("service", None, None, 1, 10)) == "s1"

    @pytest.mark.asyncio
    async def test_invalidate_all_drops_items_and_lists(self):
        cache = ResultCache()
        await cache.set(build_list_key("worker", None, None, 1, 10), "l")
        await cache.set(build_item_key("worker", 1), "i")
        await cache.set(build_item_key("service", 1), "s")
        assert await cache.invalidate_all("worker") == 2
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_purge_expired_and_clear(self):
        cache = ResultCache()
        await cache.set("short", 1, ttl=0.01)
        await cache.set("long", 2, ttl=60)
        await asyncio.sleep(0.05)
        assert await cache.purge_expired() == 1
        assert await cache.clear() == 1
        assert len(cache) == 0
