"""Unit tests for the cache stores.

Tests cover:
- get/set/remove/remove_matching/clear on the in-memory store
- copies in and out, so callers cannot edit cached values
- absolute expiry and lazy purging
- thread safety of the in-memory store
- the Redis store: key namespacing, PX expiry, JSON values, outage and
  undecodable-value handling
"""

import asyncio
import logging
import threading
from datetime import date, timedelta
from decimal import Decimal

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from freeagent.cache import (
    InMemoryCacheStore,
    RedisCacheStore,
    ResourceCache,
    create_cache_store,
)
from freeagent.core.config import FreeAgentSettings
from freeagent.models import Timeslip


TTL = timedelta(minutes=5)


# =============================================================================
# In-Memory Store Tests
# =============================================================================


class TestInMemoryCacheStore:
    """Tests for InMemoryCacheStore."""

    async def test_get_missing_key(self, store):
        assert await store.get("timeslips_1") == (None, False)

    async def test_set_then_get(self, store):
        await store.set("timeslips_1", {"hours": "1.5"}, TTL)

        assert await store.get("timeslips_1") == ({"hours": "1.5"}, True)

    async def test_cached_none_is_a_hit(self, store):
        """A stored None must be distinguishable from a miss."""
        await store.set("projects_name=Missing", None, TTL)

        assert await store.get("projects_name=Missing") == (None, True)

    async def test_set_overwrites(self, store):
        await store.set("timeslips_1", "old", TTL)
        await store.set("timeslips_1", "new", TTL)

        assert await store.get("timeslips_1") == ("new", True)
        assert len(store) == 1

    async def test_entry_fresh_until_ttl(self, store, clock):
        await store.set("timeslips_1", "value", TTL)

        clock.advance(TTL.total_seconds() - 1)

        assert await store.get("timeslips_1") == ("value", True)

    async def test_entry_expires_at_ttl(self, store, clock):
        await store.set("timeslips_1", "value", TTL)

        clock.advance(TTL.total_seconds())

        assert await store.get("timeslips_1") == (None, False)

    async def test_expired_entry_is_purged_on_read(self, store, clock):
        await store.set("timeslips_1", "value", TTL)
        clock.advance(TTL.total_seconds() + 1)

        # Stale but still physically present until a read finds it
        assert "timeslips_1" in store

        await store.get("timeslips_1")

        assert "timeslips_1" not in store

    async def test_overwrite_resets_expiry(self, store, clock):
        await store.set("timeslips_1", "v1", TTL)
        clock.advance(200)
        await store.set("timeslips_1", "v2", TTL)
        clock.advance(200)

        assert await store.get("timeslips_1") == ("v2", True)

    async def test_per_entry_ttl(self, store, clock):
        await store.set("short", "a", timedelta(seconds=10))
        await store.set("long", "b", timedelta(seconds=100))

        clock.advance(50)

        assert await store.get("short") == (None, False)
        assert await store.get("long") == ("b", True)

    async def test_zero_ttl_is_never_a_hit(self, store):
        await store.set("timeslips_1", "value", timedelta(0))

        assert await store.get("timeslips_1") == (None, False)

    async def test_remove(self, store):
        await store.set("timeslips_1", "value", TTL)

        await store.remove("timeslips_1")

        assert await store.get("timeslips_1") == (None, False)

    async def test_remove_missing_key_is_noop(self, store):
        # Should not raise
        await store.remove("never-set")

    async def test_clear(self, store):
        await store.set("a", 1, TTL)
        await store.set("b", 2, TTL)

        await store.clear()

        assert len(store) == 0

    async def test_remove_matching(self, store):
        await store.set("timeslips_project=7", [1], TTL)
        await store.set("timeslips_from_date=2024-01-01&to_date=2024-01-31", [2], TTL)
        await store.set("timeslips_all", [3], TTL)
        await store.set("timeslips_25", {"id": "25"}, TTL)
        await store.set("invoices_view=recent", [4], TTL)

        await store.remove_matching("timeslips_*=*")

        assert "timeslips_project=7" not in store
        assert "timeslips_from_date=2024-01-01&to_date=2024-01-31" not in store
        assert "timeslips_all" in store
        assert "timeslips_25" in store
        assert "invoices_view=recent" in store

    async def test_remove_matching_nothing_is_noop(self, store):
        await store.set("timeslips_all", [], TTL)

        await store.remove_matching("contacts_*=*")

        assert len(store) == 1

    async def test_editing_a_read_value_leaves_cache_intact(self, store):
        slip = Timeslip(url="https://api.freeagent.com/v2/timeslips/7", comment="orig")
        await store.set("timeslips_7", slip, TTL)

        value, _ = await store.get("timeslips_7")
        value.comment = "unsaved edit"

        cached, found = await store.get("timeslips_7")
        assert found
        assert cached.comment == "orig"
        assert cached is not value

    async def test_editing_a_stored_value_leaves_cache_intact(self, store):
        slips = [{"comment": "orig"}]
        await store.set("timeslips_all", slips, TTL)

        slips[0]["comment"] = "changed after caching"
        slips.append({"comment": "extra"})

        assert await store.get("timeslips_all") == ([{"comment": "orig"}], True)

    def test_default_clock_is_monotonic(self):
        store = InMemoryCacheStore()

        async def run():
            await store.set("k", "v", TTL)
            return await store.get("k")

        assert asyncio.run(run()) == ("v", True)

    def test_concurrent_access_from_threads(self):
        """Many threads hammering the store must not corrupt it."""
        store = InMemoryCacheStore()
        errors = []

        def worker(n: int) -> None:
            async def run():
                for i in range(200):
                    key = f"t{n}-k{i % 10}"
                    await store.set(key, n, TTL)
                    value, found = await store.get(key)
                    assert found
                    assert isinstance(value, int)
                    if i % 7 == 0:
                        await store.remove(key)
            try:
                asyncio.run(run())
            except Exception as e:  # collected and asserted below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(store) <= 80


# =============================================================================
# Redis Store Tests
# =============================================================================


class FailingRedis:
    """Redis client whose every call fails."""

    async def get(self, name):
        raise RedisConnectionError("Connection refused")

    async def set(self, name, value, px=None):
        raise RedisConnectionError("Connection refused")

    async def delete(self, *names):
        raise RedisConnectionError("Connection refused")

    async def scan_iter(self, match="*"):
        raise RedisConnectionError("Connection refused")
        yield  # pragma: no cover


class TestRedisCacheStore:
    """Tests for RedisCacheStore."""

    async def test_get_missing_key(self, fake_redis):
        store = RedisCacheStore(fake_redis)

        assert await store.get("timeslips_1") == (None, False)
        assert fake_redis.get_call_count("get") == 1

    async def test_set_uses_namespace_and_px(self, fake_redis):
        store = RedisCacheStore(fake_redis)

        await store.set("timeslips_1", {"hours": "2"}, TTL)

        assert "freeagent:timeslips_1" in fake_redis._store
        assert fake_redis.ttls["freeagent:timeslips_1"] == 300_000

    async def test_custom_namespace(self, fake_redis):
        store = RedisCacheStore(fake_redis, namespace="tenant-a")

        await store.set("contacts_all", [], TTL)

        assert "tenant-a:contacts_all" in fake_redis._store

    async def test_round_trip_returns_json_data(self, fake_redis):
        store = RedisCacheStore(fake_redis)
        slip = Timeslip(url="https://api.freeagent.com/v2/timeslips/1", hours=Decimal("1.5"),
                        dated_on=date(2024, 1, 15))

        await store.set("timeslips_1", slip, TTL)
        value, found = await store.get("timeslips_1")

        assert found
        assert value["hours"] == "1.5"
        assert value["dated_on"] == "2024-01-15"

    async def test_cached_none_is_a_hit(self, fake_redis):
        store = RedisCacheStore(fake_redis)

        await store.set("projects_name=Missing", None, TTL)

        assert await store.get("projects_name=Missing") == (None, True)

    async def test_expired_key_is_a_miss(self, fake_redis):
        store = RedisCacheStore(fake_redis)
        await store.set("timeslips_1", [1, 2], TTL)

        fake_redis.expire_all()

        assert await store.get("timeslips_1") == (None, False)

    async def test_non_positive_ttl_removes_key(self, fake_redis):
        store = RedisCacheStore(fake_redis)
        await store.set("timeslips_1", "old", TTL)

        await store.set("timeslips_1", "new", timedelta(0))

        assert await store.get("timeslips_1") == (None, False)

    async def test_remove(self, fake_redis):
        store = RedisCacheStore(fake_redis)
        await store.set("timeslips_1", "value", TTL)

        await store.remove("timeslips_1")
        await store.remove("timeslips_1")

        assert await store.get("timeslips_1") == (None, False)

    async def test_clear_only_touches_namespace(self, fake_redis):
        fake_redis._store["other:key"] = b"1"
        store = RedisCacheStore(fake_redis)
        await store.set("a", 1, TTL)
        await store.set("b", 2, TTL)

        await store.clear()

        assert list(fake_redis._store) == ["other:key"]

    async def test_remove_matching_only_touches_namespace(self, fake_redis):
        fake_redis._store["other:timeslips_project=7"] = b"[]"
        store = RedisCacheStore(fake_redis)
        await store.set("timeslips_project=7", [1], TTL)
        await store.set("timeslips_view=all&user=2", [2], TTL)
        await store.set("timeslips_all", [3], TTL)
        await store.set("timeslips_25", {"id": "25"}, TTL)

        await store.remove_matching("timeslips_*=*")

        assert sorted(fake_redis._store) == [
            "freeagent:timeslips_25",
            "freeagent:timeslips_all",
            "other:timeslips_project=7",
        ]

    async def test_remove_matching_nothing_skips_delete(self, fake_redis):
        store = RedisCacheStore(fake_redis)

        await store.remove_matching("timeslips_*=*")

        assert fake_redis.get_call_count("delete") == 0

    @pytest.mark.parametrize("corrupt", [b"{not json", b"\xff\xfe", b""])
    async def test_undecodable_value_is_a_miss(self, fake_redis, corrupt, caplog):
        fake_redis._store["freeagent:timeslips_1"] = corrupt
        store = RedisCacheStore(fake_redis)

        with caplog.at_level(logging.WARNING, logger="freeagent"):
            assert await store.get("timeslips_1") == (None, False)

        assert any("timeslips_1" in r.getMessage() for r in caplog.records)

    async def test_undecodable_value_is_refetched(self, fake_redis):
        fake_redis._store["freeagent:timeslips_1"] = b"\x00garbage"
        cache = ResourceCache(RedisCacheStore(fake_redis), "timeslips")
        calls = 0

        async def fetch():
            nonlocal calls
            calls += 1
            return {"id": "1"}

        assert await cache.get_or_fetch("timeslips_1", fetch) == {"id": "1"}
        assert await cache.get_or_fetch("timeslips_1", fetch) == {"id": "1"}
        assert calls == 1

    async def test_outage_is_a_miss_not_an_error(self):
        store = RedisCacheStore(FailingRedis())

        assert await store.get("timeslips_1") == (None, False)
        # Should not raise
        await store.set("timeslips_1", "value", TTL)
        await store.remove("timeslips_1")
        await store.remove_matching("timeslips_*=*")
        await store.clear()


class TestCreateCacheStore:
    """Tests for choosing a store from settings."""

    def test_defaults_to_in_memory(self):
        assert isinstance(create_cache_store(), InMemoryCacheStore)

    def test_in_memory_without_redis_url(self):
        settings = FreeAgentSettings(redis_url=None)

        assert isinstance(create_cache_store(settings), InMemoryCacheStore)

    def test_redis_with_redis_url(self):
        settings = FreeAgentSettings(redis_url="redis://localhost:6379/0")

        store = create_cache_store(settings)

        assert isinstance(store, RedisCacheStore)

    @pytest.mark.parametrize("ttl_seconds", [1, 60, 3600])
    async def test_ttl_converted_to_milliseconds(self, fake_redis, ttl_seconds):
        store = RedisCacheStore(fake_redis)

        await store.set("k", "v", timedelta(seconds=ttl_seconds))

        assert fake_redis.ttls["freeagent:k"] == ttl_seconds * 1000
