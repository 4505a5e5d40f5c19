"""Tests for the plan cache.

Tests cover:
- Hits within the TTL and expiry at the TTL boundary
- Oldest-first eviction past capacity
- Re-inserting a key refreshes its position and timestamp
"""

from conftest import FakeClock
from trainify.content import DEFAULT_PLANS
from trainify.plan_cache import PlanCache
from trainify.schemas import GeneratedPlans


PLANS = GeneratedPlans(**DEFAULT_PLANS)


def test_get_within_ttl(cache: PlanCache, clock: FakeClock):
    cache.put("a", PLANS)
    clock.advance(60)
    assert cache.get("a") == PLANS
    assert "a" in cache


def test_entries_expire_at_ttl(clock: FakeClock):
    cache = PlanCache(ttl_seconds=100, max_entries=10, clock=clock)
    cache.put("a", PLANS)

    clock.advance(99)
    assert cache.get("a") is not None

    clock.advance(1)
    assert cache.get("a") is None
    assert len(cache) == 0


def test_missing_key():
    assert PlanCache().get("nope") is None


def test_oldest_entry_is_evicted_past_capacity(clock: FakeClock):
    cache = PlanCache(ttl_seconds=1000, max_entries=3, clock=clock)
    for key in ["a", "b", "c", "d"]:
        cache.put(key, PLANS)
        clock.advance(1)

    assert len(cache) == 3
    assert "a" not in cache
    assert all(key in cache for key in ["b", "c", "d"])


def test_reinserting_refreshes_entry(clock: FakeClock):
    cache = PlanCache(ttl_seconds=10, max_entries=2, clock=clock)
    cache.put("a", PLANS)
    cache.put("b", PLANS)
    clock.advance(5)
    cache.put("a", PLANS)
    cache.put("c", PLANS)

    assert "b" not in cache
    clock.advance(6)
    assert cache.get("a") is not None


def test_evict_oldest_and_clear(cache: PlanCache):
    assert cache.evict_oldest() is None
    cache.put("a", PLANS)
    cache.put("b", PLANS)
    assert cache.evict_oldest() == "a"
    cache.clear()
    assert len(cache) == 0
