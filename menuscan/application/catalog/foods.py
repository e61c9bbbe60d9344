"""Menu items: read-through accessors and cache-invalidating mutations.

Two cache families are involved:

- foods_for_restaurant: the menu list of one restaurant
- food_by_id: single food documents, with short-lived "not found" entries

Every mutation touches the caches only after the backend acknowledged it,
so a failed write never leaves the cache out of sync.
"""

import logging
from typing import List, Optional

from menuscan.config import CatalogSettings
from menuscan.domain.catalog.models import Food, FoodInput, FoodUpdate
from menuscan.domain.shared.errors import BackendError, InvalidInputError, NotFoundError
from menuscan.domain.shared.ids import new_document_id
from menuscan.domain.shared.ports.document_backend import IDocumentBackend
from menuscan.domain.shared.ports.file_storage import IFileStorage
from menuscan.domain.shared.query import Equal
from menuscan.application.catalog.errors import (
    FOOD_CREATE_ATTRIBUTES,
    FOOD_UPDATE_ATTRIBUTES,
    food_query_schema_error,
    food_write_schema_error,
    is_missing_query_attribute_error,
    is_unknown_attribute_error,
)
from menuscan.infrastructure.cache.keys import food_by_id_key, foods_for_restaurant_key
from menuscan.infrastructure.cache.registry import CatalogCache
from menuscan.infrastructure.cache.ttl_cache import (
    MISSING,
    UNKNOWN,
    CacheResult,
    Found,
    as_list,
)

logger = logging.getLogger(__name__)


class FoodService:
    """Read-through access to menu items plus their mutations."""

    def __init__(
        self,
        backend: IDocumentBackend,
        cache: CatalogCache,
        settings: CatalogSettings,
        storage: Optional[IFileStorage] = None,
    ) -> None:
        """
        Initialize service.

        Args:
            backend: Document backend port
            cache: Catalog cache registry
            settings: Collection and bucket identifiers
            storage: File storage port for image URLs (optional)
        """
        self._backend = backend
        self._cache = cache
        self._settings = settings
        self._storage = storage

    # ============================================================
    # Peek (sync, cache only)
    # ============================================================

    def peek_food_by_id(self, food_id: str) -> CacheResult[Food]:
        """Cached food, MISSING if known not to exist, UNKNOWN otherwise."""
        if not food_id:
            return UNKNOWN
        return self._cache.food_by_id.get(food_by_id_key(food_id))

    def peek_foods_for_restaurant(self, user_id: str) -> CacheResult[List[Food]]:
        """Cached menu of a restaurant, UNKNOWN if not cached."""
        if not user_id:
            return UNKNOWN
        return as_list(self._cache.foods_for_restaurant.get(foods_for_restaurant_key(user_id)))

    # ============================================================
    # Fetch (async, cache first)
    # ============================================================

    async def get_food_by_id(self, food_id: str) -> Optional[Food]:
        """
        Fetch a single food, consulting the cache first.

        A "not found" answer is cached briefly and returned as None.

        Returns:
            Food, or None if it does not exist

        Raises:
            ConfigurationError: If the foods collection is not configured
            BackendError: On any other backend failure (nothing cached)
        """
        if not food_id:
            return None

        collection = self._settings.require_foods()
        key = food_by_id_key(food_id)
        cached = self._cache.food_by_id.get(key)
        if isinstance(cached, Found):
            return cached.value
        if cached is MISSING:
            return None

        try:
            doc = await self._backend.get_document(collection, food_id)
        except NotFoundError:
            logger.info("Food not found", extra={"food_id": food_id})
            self._cache.food_by_id.set(key, None, self._cache.ttls.food_not_found)
            return None

        food = Food.model_validate(doc)
        self._cache.food_by_id.set(key, food, self._cache.ttls.food_by_id)
        return food

    async def list_foods_for_restaurant(self, user_id: str) -> List[Food]:
        """
        Fetch a restaurant's menu, consulting the cache first.

        Raises:
            ConfigurationError: If the foods collection is not configured
            SchemaMismatchError: If the collection lacks restaurantUserId
            BackendError: On any other backend failure (nothing cached)
        """
        if not user_id:
            return []

        collection = self._settings.require_foods()
        key = foods_for_restaurant_key(user_id)
        cached = self._cache.foods_for_restaurant.get(key)
        if isinstance(cached, Found):
            return list(cached.value)

        try:
            docs = await self._backend.list_documents(
                collection, [Equal.of("restaurantUserId", user_id)]
            )
        except BackendError as e:
            if is_missing_query_attribute_error(e):
                raise food_query_schema_error(e) from e
            raise

        foods = [Food.model_validate(doc) for doc in docs]
        self._cache.foods_for_restaurant.set(
            key, tuple(foods), self._cache.ttls.foods_for_restaurant
        )
        return foods

    # ============================================================
    # Mutations (backend first, then invalidate)
    # ============================================================

    async def create_food(self, user_id: str, food: FoodInput) -> Food:
        """
        Create a menu item for a restaurant.

        On success the restaurant's menu listing is invalidated and the
        created document is written into food_by_id, so the detail screen
        opened next does not refetch.

        Raises:
            ConfigurationError: If the foods collection is not configured
            InvalidInputError: If user_id is empty
            SchemaMismatchError: If the collection lacks an attribute
            BackendError: On any other backend failure (cache untouched)
        """
        collection = self._settings.require_foods()
        if not user_id:
            raise InvalidInputError("Missing restaurant user id.")

        try:
            doc = await self._backend.create_document(
                collection, new_document_id(), food.to_document(user_id)
            )
        except BackendError as e:
            if is_unknown_attribute_error(e):
                raise food_write_schema_error(e, FOOD_CREATE_ATTRIBUTES) from e
            raise

        created = Food.model_validate(doc)
        self._cache.foods_for_restaurant.delete(foods_for_restaurant_key(user_id))
        self._cache.food_by_id.set(
            food_by_id_key(created.id), created, self._cache.ttls.food_by_id
        )
        logger.info(
            "Food created",
            extra={"food_id": created.id, "restaurant_id": user_id},
        )
        return created

    async def update_food(self, user_id: str, food_id: str, update: FoodUpdate) -> Food:
        """
        Update a menu item.

        On success the menu listing of the owning restaurant (as stored on
        the updated document, and user_id if it differs) is invalidated and
        the updated document replaces the food_by_id entry.

        Raises:
            ConfigurationError: If the foods collection is not configured
            InvalidInputError: If food_id is empty
            NotFoundError: If the food does not exist
            SchemaMismatchError: If the collection lacks an attribute
            BackendError: On any other backend failure (cache untouched)
        """
        collection = self._settings.require_foods()
        if not food_id:
            raise InvalidInputError("Missing food id.")

        try:
            doc = await self._backend.update_document(collection, food_id, update.to_patch())
        except BackendError as e:
            if is_unknown_attribute_error(e):
                raise food_write_schema_error(e, FOOD_UPDATE_ATTRIBUTES) from e
            raise

        updated = Food.model_validate(doc)
        for owner_id in {user_id, updated.restaurant_user_id}:
            if owner_id:
                self._cache.foods_for_restaurant.delete(foods_for_restaurant_key(owner_id))
        self._cache.food_by_id.set(
            food_by_id_key(food_id), updated, self._cache.ttls.food_by_id
        )
        logger.info(
            "Food updated",
            extra={"food_id": food_id, "restaurant_id": updated.restaurant_user_id},
        )
        return updated

    async def delete_food(self, user_id: str, food_id: str) -> None:
        """
        Delete a menu item. An empty food_id is a no-op.

        On success both the menu listing and the food_by_id entry are removed.

        Raises:
            ConfigurationError: If the foods collection is not configured
            NotFoundError: If the food does not exist
            BackendError: On any other backend failure (cache untouched)
        """
        collection = self._settings.require_foods()
        if not food_id:
            return

        await self._backend.delete_document(collection, food_id)

        self._cache.foods_for_restaurant.delete(foods_for_restaurant_key(user_id))
        self._cache.food_by_id.delete(food_by_id_key(food_id))
        logger.info(
            "Food deleted",
            extra={"food_id": food_id, "restaurant_id": user_id},
        )

    # ============================================================
    # Images
    # ============================================================

    def get_food_image_view_url(self, file_id: str) -> Optional[str]:
        """URL for a food photo, or None without a file id, bucket or storage."""
        bucket_id = self._settings.food_images_bucket_id
        if not file_id or not bucket_id or self._storage is None:
            return None
        return self._storage.get_file_view_url(bucket_id, file_id)
