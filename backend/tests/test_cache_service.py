"""Tests for the bounded per-user habit cache."""

from __future__ import annotations

import time

from services.cache_service import HabitCache


def test_miss_then_hit_is_tracked():
    cache = HabitCache(max_users=4, ttl_seconds=60)

    assert cache.get(1) is None
    cache.set(1, {1: {"id": 1, "name": "Read"}})

    assert cache.get(1) == {1: {"id": 1, "name": "Read"}}
    stats = cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 0.5


def test_returned_mapping_is_a_copy():
    cache = HabitCache(max_users=4, ttl_seconds=60)
    cache.set(1, {1: {"id": 1}})

    cache.get(1).pop(1)

    assert 1 in cache.get(1)


def test_least_recently_used_user_is_evicted():
    cache = HabitCache(max_users=2, ttl_seconds=60)
    cache.set(1, {})
    cache.set(2, {})
    cache.get(1)
    cache.set(3, {})

    assert cache.get(2) is None
    assert cache.get(1) == {}
    assert cache.get(3) == {}


def test_entries_expire_after_ttl(monkeypatch):
    cache = HabitCache(max_users=4, ttl_seconds=10)
    now = time.monotonic()
    monkeypatch.setattr("services.cache_service.time.monotonic", lambda: now)
    cache.set(1, {})

    monkeypatch.setattr("services.cache_service.time.monotonic", lambda: now + 11)
    assert cache.get(1) is None

    cache.set(2, {})
    monkeypatch.setattr("services.cache_service.time.monotonic", lambda: now + 30)
    cache.clear_expired()
    assert cache.get_stats()["total_entries"] == 0


def test_zero_ttl_disables_caching():
    cache = HabitCache(max_users=4, ttl_seconds=0)
    cache.set(1, {1: {}})

    assert cache.get(1) is None


def test_invalidate_and_clear():
    cache = HabitCache(max_users=4, ttl_seconds=60)
    cache.set(1, {})
    cache.set(2, {})

    cache.invalidate(1)
    assert cache.get(1) is None
    assert cache.get(2) == {}

    cache.clear()
    assert cache.get_stats()["total_entries"] == 0
