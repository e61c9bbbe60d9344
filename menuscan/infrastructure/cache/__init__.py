"""Cache implementations."""

from menuscan.infrastructure.cache.registry import (
    CacheTTLs,
    CatalogCache,
    get_catalog_cache,
    reset_catalog_cache,
)
from menuscan.infrastructure.cache.ttl_cache import (
    MISSING,
    UNKNOWN,
    CacheEntry,
    CacheResult,
    Found,
    Missing,
    TTLCache,
    Unknown,
    is_known,
)

__all__ = [
    "MISSING",
    "UNKNOWN",
    "CacheEntry",
    "CacheResult",
    "CacheTTLs",
    "CatalogCache",
    "Found",
    "Missing",
    "TTLCache",
    "Unknown",
    "get_catalog_cache",
    "is_known",
    "reset_catalog_cache",
]
