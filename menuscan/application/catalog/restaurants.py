"""Restaurant lookups and profile upsert.

Restaurants are looked up in batches (the customer's scanned restaurants),
cached per canonical id set. Any restaurant write clears the whole family,
since the multi-id keys embedding a given id cannot be enumerated cheaply.
"""

import logging
from typing import Iterable, List, Optional

from menuscan.config import CatalogSettings
from menuscan.domain.catalog.models import Restaurant
from menuscan.domain.shared.errors import ConflictError, NotFoundError
from menuscan.domain.shared.ports.document_backend import IDocumentBackend
from menuscan.domain.shared.query import Equal
from menuscan.infrastructure.cache.keys import normalize_ids, restaurants_key
from menuscan.infrastructure.cache.registry import CatalogCache
from menuscan.infrastructure.cache.ttl_cache import CacheResult, Found, as_list

logger = logging.getLogger(__name__)


class RestaurantService:
    """Read-through access to restaurant profiles."""

    def __init__(
        self,
        backend: IDocumentBackend,
        cache: CatalogCache,
        settings: CatalogSettings,
    ) -> None:
        """
        Initialize service.

        Args:
            backend: Document backend port
            cache: Catalog cache registry
            settings: Collection identifiers
        """
        self._backend = backend
        self._cache = cache
        self._settings = settings

    def peek_restaurants_by_ids(self, ids: Iterable[str]) -> CacheResult[List[Restaurant]]:
        """
        Return cached restaurants without I/O.

        An empty id list is vacuously satisfied: Found([]).
        """
        normalized = normalize_ids(ids)
        if not normalized:
            return Found([])
        return as_list(self._cache.restaurants_by_ids.get(restaurants_key(normalized)))

    async def list_restaurants_by_ids(self, ids: Iterable[str]) -> List[Restaurant]:
        """
        Fetch restaurants by id, consulting the cache first.

        Empty results are not cached: a restaurant profile may be created
        moments after a customer scans its code.

        Raises:
            ConfigurationError: If the restaurants collection is not configured
            BackendError: On backend failure (nothing cached)
        """
        normalized = normalize_ids(ids)
        if not normalized:
            return []

        collection = self._settings.require_restaurants()
        key = restaurants_key(normalized)
        cached = self._cache.restaurants_by_ids.get(key)
        if isinstance(cached, Found):
            return list(cached.value)

        docs = await self._backend.list_documents(collection, [Equal.of("$id", normalized)])
        restaurants = [Restaurant.model_validate(doc) for doc in docs]
        if restaurants:
            self._cache.restaurants_by_ids.set(
                key, tuple(restaurants), self._cache.ttls.restaurants_by_ids
            )
        return restaurants

    async def upsert_restaurant(
        self, user_id: str, name: Optional[str] = None
    ) -> Optional[Restaurant]:
        """
        Create the operator's restaurant profile or sync its name.

        Flow:
        1. Load the profile (document id == operator user id)
        2. Update the name if a non-empty, different name is given
        3. If the profile does not exist, create it; losing a create race
           (ConflictError) is fine
        4. Clear the restaurants-by-ids cache

        Args:
            user_id: Operator user id
            name: Display name (blank keeps the current one)

        Returns:
            The stored Restaurant, or None when another writer created it
            concurrently or user_id is empty

        Raises:
            ConfigurationError: If the restaurants collection is not configured
            BackendError: On backend failure (cache untouched)
        """
        collection = self._settings.require_restaurants()
        if not user_id:
            return None

        next_name = (name or "").strip()
        result: Optional[Restaurant]

        try:
            existing = Restaurant.model_validate(
                await self._backend.get_document(collection, user_id)
            )
            result = existing
            if next_name and next_name != existing.name:
                result = Restaurant.model_validate(
                    await self._backend.update_document(
                        collection, user_id, {"name": next_name}
                    )
                )
                logger.info(
                    "Restaurant renamed",
                    extra={"restaurant_id": user_id, "restaurant_name": next_name},
                )
        except NotFoundError:
            try:
                result = Restaurant.model_validate(
                    await self._backend.create_document(
                        collection, user_id, {"name": next_name}
                    )
                )
                logger.info("Restaurant profile created", extra={"restaurant_id": user_id})
            except ConflictError:
                logger.info(
                    "Restaurant profile created concurrently",
                    extra={"restaurant_id": user_id},
                )
                result = None

        self._cache.restaurants_by_ids.clear()
        return result
