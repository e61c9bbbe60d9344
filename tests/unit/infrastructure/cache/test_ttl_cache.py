"""Tests for the keyed TTL cache."""

import math

import pytest

from menuscan.infrastructure.cache.ttl_cache import (
    MISSING,
    UNKNOWN,
    CacheEntry,
    Found,
    TTLCache,
    as_list,
    is_known,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(clock=clock, name="test")


class TestTTLCacheStates:
    """The three lookup outcomes."""

    def test_unknown_for_never_cached_key(self, cache: TTLCache) -> None:
        assert cache.get("nope") is UNKNOWN

    def test_found_for_live_value(self, cache: TTLCache) -> None:
        cache.set("k", {"a": 1}, ttl_seconds=10)
        assert cache.get("k") == Found({"a": 1})

    def test_missing_for_cached_none(self, cache: TTLCache) -> None:
        cache.set("k", None, ttl_seconds=10)
        assert cache.get("k") is MISSING

    def test_empty_list_is_found_not_missing(self, cache: TTLCache) -> None:
        cache.set("k", [], ttl_seconds=10)
        assert cache.get("k") == Found([])

    def test_is_known(self) -> None:
        assert is_known(Found(1)) is True
        assert is_known(MISSING) is True
        assert is_known(UNKNOWN) is False

    def test_as_list_copies_found(self) -> None:
        stored = ("a", "b")
        result = as_list(Found(stored))
        assert result == Found(["a", "b"])
        assert isinstance(result, Found)
        result.value.clear()
        assert stored == ("a", "b")

    def test_as_list_passes_through_markers(self) -> None:
        assert as_list(MISSING) is MISSING
        assert as_list(UNKNOWN) is UNKNOWN

    def test_reprs(self) -> None:
        assert repr(MISSING) == "MISSING"
        assert repr(UNKNOWN) == "UNKNOWN"


class TestTTLCacheExpiry:
    """Entries are absent from the instant now >= set_time + ttl."""

    def test_live_just_before_expiry(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "v", ttl_seconds=120)
        clock.now = 119.999
        assert cache.get("k") == Found("v")

    def test_expired_exactly_at_boundary(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "v", ttl_seconds=120)
        clock.now = 120.0
        assert cache.get("k") is UNKNOWN

    def test_expired_entry_removed_lazily(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "v", ttl_seconds=5)
        clock.now = 10.0
        assert len(cache) == 1
        assert cache.get("k") is UNKNOWN
        assert len(cache) == 0

    def test_negative_entry_expires(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", None, ttl_seconds=30)
        clock.now = 30.0
        assert cache.get("k") is UNKNOWN

    def test_set_replaces_value_and_expiry(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "old", ttl_seconds=10)
        clock.now = 8.0
        cache.set("k", "new", ttl_seconds=10)
        clock.now = 15.0
        assert cache.get("k") == Found("new")

    def test_entry_is_expired(self) -> None:
        entry = CacheEntry(value="v", expires_at=10.0)
        assert entry.is_expired(9.9) is False
        assert entry.is_expired(10.0) is True

    def test_contains_only_live_entries(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "v", ttl_seconds=5)
        assert "k" in cache
        clock.now = 5.0
        assert "k" not in cache
        assert 42 not in cache


class TestTTLCacheValidation:
    @pytest.mark.parametrize("ttl", [0, -1, math.inf, math.nan, True, "10"])
    def test_set_rejects_invalid_ttl(self, cache: TTLCache, ttl: object) -> None:
        with pytest.raises(ValueError):
            cache.set("k", "v", ttl_seconds=ttl)  # type: ignore[arg-type]
        assert cache.get("k") is UNKNOWN


class TestTTLCacheRemoval:
    def test_delete_is_idempotent(self, cache: TTLCache) -> None:
        cache.set("k", "v", ttl_seconds=10)
        assert cache.delete("k") is True
        assert cache.delete("k") is False
        assert cache.get("k") is UNKNOWN

    def test_clear_returns_count(self, cache: TTLCache) -> None:
        cache.set("a", 1, ttl_seconds=10)
        cache.set("b", None, ttl_seconds=10)
        assert cache.clear() == 2
        assert cache.get("a") is UNKNOWN
        assert cache.get("b") is UNKNOWN

    def test_clear_does_not_touch_other_instances(self, clock: FakeClock) -> None:
        first: TTLCache = TTLCache(clock=clock, name="first")
        second: TTLCache = TTLCache(clock=clock, name="second")
        first.set("k", 1, ttl_seconds=10)
        second.set("k", 2, ttl_seconds=10)

        first.clear()

        assert first.get("k") is UNKNOWN
        assert second.get("k") == Found(2)

    def test_purge_expired_matches_lazy_expiry(
        self, cache: TTLCache, clock: FakeClock
    ) -> None:
        cache.set("short", 1, ttl_seconds=5)
        cache.set("long", 2, ttl_seconds=50)
        clock.now = 10.0

        assert cache.purge_expired() == 1
        assert len(cache) == 1
        assert cache.get("short") is UNKNOWN
        assert cache.get("long") == Found(2)
