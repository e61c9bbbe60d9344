"""Catalog cache registry.

Owns one TTLCache per entity family plus the TTL policy, and exposes a
lifecycle (reset_all, purge_expired) so tests and long-lived processes can
manage the state explicitly. Services receive a CatalogCache by
constructor injection; get_catalog_cache() returns the process-wide
instance for application wiring.

Usage:
    from menuscan.infrastructure.cache.registry import get_catalog_cache

    cache = get_catalog_cache()      # Singleton instance
    cache.reset_all()                # Drop every cached family
"""

from __future__ import annotations

import logging
import os
import time
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from menuscan.domain.catalog.models import Food, Restaurant, Review
from menuscan.domain.shared.errors import ConfigurationError
from menuscan.infrastructure.cache.ttl_cache import Clock, TTLCache

logger = logging.getLogger(__name__)


class CacheTTLs(BaseModel):
    """
    Time-to-live policy per family, in seconds.

    Menus and reviews change more often than restaurant names, so they
    expire sooner. A confirmed "food not found" is only remembered briefly
    so a food created moments later is not hidden.
    """

    model_config = ConfigDict(frozen=True)

    restaurants_by_ids: float = Field(300.0, gt=0, allow_inf_nan=False)
    foods_for_restaurant: float = Field(120.0, gt=0, allow_inf_nan=False)
    food_by_id: float = Field(300.0, gt=0, allow_inf_nan=False)
    food_not_found: float = Field(30.0, gt=0, allow_inf_nan=False)
    reviews_for_food: float = Field(120.0, gt=0, allow_inf_nan=False)

    @classmethod
    def from_env(cls) -> "CacheTTLs":
        """
        Build from CACHE_TTL_* environment variables, falling back to defaults.

        Environment variables:
            CACHE_TTL_RESTAURANTS_S, CACHE_TTL_FOODS_S, CACHE_TTL_FOOD_S,
            CACHE_TTL_FOOD_NOT_FOUND_S, CACHE_TTL_REVIEWS_S

        Raises:
            ConfigurationError: If a value is not a positive, finite number
        """
        env_map = {
            "restaurants_by_ids": "CACHE_TTL_RESTAURANTS_S",
            "foods_for_restaurant": "CACHE_TTL_FOODS_S",
            "food_by_id": "CACHE_TTL_FOOD_S",
            "food_not_found": "CACHE_TTL_FOOD_NOT_FOUND_S",
            "reviews_for_food": "CACHE_TTL_REVIEWS_S",
        }
        overrides: Dict[str, float] = {}
        for field_name, env_name in env_map.items():
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                overrides[field_name] = float(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"{env_name} must be a number of seconds, got {raw!r}"
                ) from e
        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid cache TTL settings: {e}") from e


class CatalogCache:
    """
    The four catalog cache families.

    Each family is a separate TTLCache instance, so clearing one (e.g.
    restaurants after a name change) never touches the others. List
    families hold tuples; services hand callers a fresh list per call.

    Attributes:
        restaurants_by_ids: Restaurant lists keyed by canonical id set
        foods_for_restaurant: Menu listings keyed by restaurant user id
        food_by_id: Single food documents, None for "not found"
        reviews_for_food: Review lists keyed by food id
        ttls: TTL policy applied by the services
    """

    def __init__(
        self,
        ttls: Optional[CacheTTLs] = None,
        clock: Clock = time.time,
    ) -> None:
        self.ttls = ttls or CacheTTLs()
        self.restaurants_by_ids: TTLCache[Tuple[Restaurant, ...]] = TTLCache(
            clock=clock, name="restaurants_by_ids"
        )
        self.foods_for_restaurant: TTLCache[Tuple[Food, ...]] = TTLCache(
            clock=clock, name="foods_for_restaurant"
        )
        self.food_by_id: TTLCache[Food] = TTLCache(clock=clock, name="food_by_id")
        self.reviews_for_food: TTLCache[Tuple[Review, ...]] = TTLCache(
            clock=clock, name="reviews_for_food"
        )

    def _families(self) -> Dict[str, TTLCache]:  # type: ignore[type-arg]
        return {
            "restaurants_by_ids": self.restaurants_by_ids,
            "foods_for_restaurant": self.foods_for_restaurant,
            "food_by_id": self.food_by_id,
            "reviews_for_food": self.reviews_for_food,
        }

    def reset_all(self) -> None:
        """Drop every entry in every family."""
        removed = sum(cache.clear() for cache in self._families().values())
        logger.info("Catalog cache reset", extra={"removed": removed})

    def purge_expired(self) -> int:
        """Sweep expired entries from every family. Returns the number removed."""
        return sum(cache.purge_expired() for cache in self._families().values())

    def stats(self) -> Dict[str, int]:
        """Stored entry count per family (expired-but-unswept included)."""
        return {name: len(cache) for name, cache in self._families().items()}


# Singleton instance (lazy initialization)
_catalog_cache: Optional[CatalogCache] = None


def get_catalog_cache() -> CatalogCache:
    """Get the process-wide catalog cache, created on first use."""
    global _catalog_cache
    if _catalog_cache is None:
        _catalog_cache = CatalogCache(ttls=CacheTTLs.from_env())
    return _catalog_cache


def reset_catalog_cache() -> None:
    """
    Forget the process-wide instance.

    The next get_catalog_cache() call builds a fresh, empty cache (and
    re-reads CACHE_TTL_* variables).
    """
    global _catalog_cache
    _catalog_cache = None
