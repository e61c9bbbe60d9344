"""
In-memory keyed cache with per-entry TTL.

Lookups return an explicit three-state result so callers never confuse
"checked, does not exist" with "not checked yet":

- Found(value): live entry
- MISSING: live negative entry (stored value is None)
- UNKNOWN: never cached, deleted, or expired

Expiry is lazy: an entry is treated as absent from the instant
``now >= expires_at`` and is physically removed when next touched.
purge_expired() is an optional sweep with identical observable behaviour.

Not thread-safe. Intended for a single asyncio event loop, where get/set/
delete/clear never suspend.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union

logger = logging.getLogger(__name__)

V = TypeVar("V")

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """Stored value plus absolute expiry instant (seconds, cache clock)."""

    value: Optional[V]
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class Found(Generic[V]):
    """Live cache entry holding a value."""

    value: V


@dataclass(frozen=True)
class Missing:
    """Live negative entry: the thing is known not to exist."""

    def __repr__(self) -> str:
        return "MISSING"


@dataclass(frozen=True)
class Unknown:
    """No usable entry: never cached or expired."""

    def __repr__(self) -> str:
        return "UNKNOWN"


MISSING = Missing()
UNKNOWN = Unknown()

CacheResult = Union[Found[V], Missing, Unknown]


def is_known(result: "CacheResult[V]") -> bool:
    """True for Found and MISSING, i.e. a definite answer without I/O."""
    return not isinstance(result, Unknown)


def as_list(result: "CacheResult[Sequence[V]]") -> "CacheResult[List[V]]":
    """Copy a cached sequence into a fresh list the caller may mutate."""
    if isinstance(result, Found):
        return Found(list(result.value))
    return result


class TTLCache(Generic[V]):
    """
    Keyed TTL cache.

    Example:
        >>> cache: TTLCache[list] = TTLCache(name="foods")
        >>> cache.set("foodsForRestaurant:r1", [], ttl_seconds=120)
        >>> cache.get("foodsForRestaurant:r1")
        Found(value=[])
        >>> cache.get("foodsForRestaurant:r2")
        UNKNOWN
    """

    def __init__(self, clock: Clock = time.time, name: str = "cache") -> None:
        """
        Initialize empty cache.

        Args:
            clock: Returns the current time in seconds (injectable for tests)
            name: Label used in log records
        """
        self._entries: Dict[str, CacheEntry[V]] = {}
        self._clock = clock
        self.name = name

    def get(self, key: str) -> CacheResult[V]:
        """
        Look up a key without any I/O.

        Returns:
            Found(value), MISSING for a cached negative result, or UNKNOWN
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss", extra={"cache": self.name, "key": key})
            return UNKNOWN

        if entry.is_expired(self._clock()):
            logger.debug("Cache entry expired", extra={"cache": self.name, "key": key})
            del self._entries[key]
            return UNKNOWN

        logger.debug("Cache hit", extra={"cache": self.name, "key": key})
        if entry.value is None:
            return MISSING
        return Found(entry.value)

    def set(self, key: str, value: Optional[V], ttl_seconds: float) -> None:
        """
        Store a value, replacing any existing entry.

        Args:
            key: Cache key
            value: Value to cache; None records a negative result
            ttl_seconds: Positive, finite time-to-live

        Raises:
            ValueError: If ttl_seconds is not positive and finite
        """
        if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, (int, float)):
            raise ValueError(f"ttl_seconds must be a number, got {ttl_seconds!r}")
        if not math.isfinite(ttl_seconds) or ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive and finite, got {ttl_seconds}")

        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl_seconds)
        logger.debug(
            "Cached entry",
            extra={
                "cache": self.name,
                "key": key,
                "ttl_seconds": ttl_seconds,
                "negative": value is None,
            },
        )

    def delete(self, key: str) -> bool:
        """
        Remove a key regardless of expiry. Idempotent.

        Returns:
            True if an entry was physically removed
        """
        removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug("Deleted cache entry", extra={"cache": self.name, "key": key})
        return removed

    def clear(self) -> int:
        """
        Remove every entry of this instance.

        Returns:
            Number of entries removed
        """
        count = len(self._entries)
        self._entries.clear()
        logger.debug("Cache cleared", extra={"cache": self.name, "removed": count})
        return count

    def purge_expired(self) -> int:
        """
        Physically remove expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired_keys = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired_keys:
            del self._entries[key]

        if expired_keys:
            logger.debug(
                "Purged expired entries",
                extra={"cache": self.name, "removed": len(expired_keys)},
            )
        return len(expired_keys)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TTLCache(name={self.name!r}, entries={len(self._entries)})"
