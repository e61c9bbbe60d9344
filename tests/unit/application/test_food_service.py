"""Tests for FoodService: read-through caching and mutation invalidation."""

from unittest.mock import AsyncMock

import pytest

from menuscan.application.catalog.foods import FoodService
from menuscan.config import CatalogSettings
from menuscan.domain.catalog.models import FoodInput, FoodUpdate
from menuscan.domain.shared.errors import (
    BackendError,
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    SchemaMismatchError,
)
from menuscan.infrastructure.backends.in_memory import InMemoryDocumentBackend
from menuscan.infrastructure.cache.registry import CatalogCache
from menuscan.infrastructure.cache.ttl_cache import MISSING, UNKNOWN, Found

FOODS = "foods"


def food_doc(food_id: str, restaurant_id: str = "r1", name: str = "Pizza") -> dict:
    return {
        "$id": food_id,
        "restaurantUserId": restaurant_id,
        "name": name,
        "ingredients": ["tomato"],
        "cookTimeMinutes": 10,
        "price": 8.0,
        "imageFileId": "img",
        "available": True,
    }


async def seed_food(
    backend: InMemoryDocumentBackend, food_id: str, restaurant_id: str = "r1"
) -> None:
    doc = food_doc(food_id, restaurant_id)
    await backend.create_document(FOODS, food_id, {k: v for k, v in doc.items() if k != "$id"})


@pytest.fixture
def new_food() -> FoodInput:
    return FoodInput(
        name="Lasagna",
        ingredients=["pasta", "ragu"],
        cook_time_minutes=40,
        price=14.5,
        image_file_id="img-lasagna",
    )


@pytest.fixture
def mock_backend() -> AsyncMock:
    backend = AsyncMock()
    backend.get_document.return_value = food_doc("f1")
    backend.list_documents.return_value = [food_doc("f1")]
    return backend


class TestGetFoodById:
    @pytest.mark.asyncio
    async def test_empty_id(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        assert await food_service.get_food_by_id("") is None
        assert food_service.peek_food_by_id("") is UNKNOWN
        assert backend.calls["get_document"] == 0

    @pytest.mark.asyncio
    async def test_hit_after_fetch(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await seed_food(backend, "f1")

        first = await food_service.get_food_by_id("f1")
        second = await food_service.get_food_by_id("f1")

        assert first is not None
        assert second == first
        assert food_service.peek_food_by_id("f1") == Found(first)
        assert backend.calls["get_document"] == 1

    @pytest.mark.asyncio
    async def test_not_found_is_cached_briefly(
        self, food_service: FoodService, backend: InMemoryDocumentBackend, clock
    ) -> None:
        assert await food_service.get_food_by_id("ghost") is None
        assert await food_service.get_food_by_id("ghost") is None
        assert backend.calls["get_document"] == 1
        assert food_service.peek_food_by_id("ghost") is MISSING

        clock.advance(30)

        assert food_service.peek_food_by_id("ghost") is UNKNOWN
        await seed_food(backend, "ghost")
        assert await food_service.get_food_by_id("ghost") is not None
        assert backend.calls["get_document"] == 2

    @pytest.mark.asyncio
    async def test_backend_error_propagates_uncached(
        self, cache: CatalogCache, settings: CatalogSettings, mock_backend: AsyncMock
    ) -> None:
        mock_backend.get_document.side_effect = BackendError("offline")
        service = FoodService(mock_backend, cache, settings)

        with pytest.raises(BackendError):
            await service.get_food_by_id("f1")
        assert service.peek_food_by_id("f1") is UNKNOWN

    @pytest.mark.asyncio
    async def test_missing_config_raises_before_io(
        self, cache: CatalogCache, mock_backend: AsyncMock
    ) -> None:
        service = FoodService(mock_backend, cache, CatalogSettings())

        with pytest.raises(ConfigurationError):
            await service.get_food_by_id("f1")
        mock_backend.get_document.assert_not_called()


class TestListFoodsForRestaurant:
    @pytest.mark.asyncio
    async def test_ttl_window(
        self, food_service: FoodService, backend: InMemoryDocumentBackend, clock
    ) -> None:
        await seed_food(backend, "f1", "r1")
        await seed_food(backend, "f2", "r2")

        foods = await food_service.list_foods_for_restaurant("r1")
        assert [f.id for f in foods] == ["f1"]

        clock.advance(60)
        assert isinstance(food_service.peek_foods_for_restaurant("r1"), Found)
        await food_service.list_foods_for_restaurant("r1")
        assert backend.calls["list_documents"] == 1

        clock.advance(70)
        assert food_service.peek_foods_for_restaurant("r1") is UNKNOWN
        await food_service.list_foods_for_restaurant("r1")
        assert backend.calls["list_documents"] == 2

    @pytest.mark.asyncio
    async def test_empty_menu_is_cached(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        assert await food_service.list_foods_for_restaurant("r1") == []
        assert food_service.peek_foods_for_restaurant("r1") == Found([])
        await food_service.list_foods_for_restaurant("r1")
        assert backend.calls["list_documents"] == 1

    @pytest.mark.asyncio
    async def test_caller_mutation_does_not_leak_into_cache(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await seed_food(backend, "f1", "r1")

        foods = await food_service.list_foods_for_restaurant("r1")
        foods.clear()
        peeked = food_service.peek_foods_for_restaurant("r1")
        assert isinstance(peeked, Found)
        peeked.value.append(peeked.value[0])

        menu = await food_service.list_foods_for_restaurant("r1")
        assert [f.id for f in menu] == ["f1"]
        assert backend.calls["list_documents"] == 1

    @pytest.mark.asyncio
    async def test_empty_user_id(self, food_service: FoodService) -> None:
        assert await food_service.list_foods_for_restaurant("") == []
        assert food_service.peek_foods_for_restaurant("") is UNKNOWN

    @pytest.mark.asyncio
    async def test_missing_query_attribute_translated(
        self, cache: CatalogCache, settings: CatalogSettings, mock_backend: AsyncMock
    ) -> None:
        mock_backend.list_documents.side_effect = BackendError(
            'Invalid query: Attribute not found in schema: restaurantUserId', status_code=400
        )
        service = FoodService(mock_backend, cache, settings)

        with pytest.raises(SchemaMismatchError, match="restaurantUserId") as exc_info:
            await service.list_foods_for_restaurant("r1")
        assert exc_info.value.status_code == 400
        assert service.peek_foods_for_restaurant("r1") is UNKNOWN


class TestCreateFood:
    @pytest.mark.asyncio
    async def test_invalidates_menu_and_writes_through(
        self, food_service: FoodService, backend: InMemoryDocumentBackend, new_food: FoodInput
    ) -> None:
        await food_service.list_foods_for_restaurant("r1")

        created = await food_service.create_food("r1", new_food)

        assert created.restaurant_user_id == "r1"
        assert food_service.peek_foods_for_restaurant("r1") is UNKNOWN
        assert food_service.peek_food_by_id(created.id) == Found(created)

        menu = await food_service.list_foods_for_restaurant("r1")
        assert [f.id for f in menu] == [created.id]
        assert await food_service.get_food_by_id(created.id) == created
        assert backend.calls["get_document"] == 0

    @pytest.mark.asyncio
    async def test_requires_user_id(self, food_service: FoodService, new_food: FoodInput) -> None:
        with pytest.raises(InvalidInputError):
            await food_service.create_food("", new_food)

    @pytest.mark.asyncio
    async def test_unknown_attribute_translated(
        self,
        cache: CatalogCache,
        settings: CatalogSettings,
        mock_backend: AsyncMock,
        new_food: FoodInput,
    ) -> None:
        mock_backend.create_document.side_effect = BackendError(
            'Invalid document structure: unknown attribute: "available"',
            status_code=400,
        )
        service = FoodService(mock_backend, cache, settings)

        with pytest.raises(SchemaMismatchError, match="cookTimeMinutes"):
            await service.create_food("r1", new_food)

    @pytest.mark.asyncio
    async def test_failure_leaves_cache(
        self,
        cache: CatalogCache,
        settings: CatalogSettings,
        mock_backend: AsyncMock,
        new_food: FoodInput,
    ) -> None:
        service = FoodService(mock_backend, cache, settings)
        await service.list_foods_for_restaurant("r1")
        mock_backend.create_document.side_effect = BackendError("offline")

        with pytest.raises(BackendError):
            await service.create_food("r1", new_food)

        assert isinstance(service.peek_foods_for_restaurant("r1"), Found)


class TestUpdateFood:
    @pytest.mark.asyncio
    async def test_invalidates_owner_from_updated_document(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await seed_food(backend, "f1", "r1")
        await food_service.list_foods_for_restaurant("r1")

        await food_service.update_food(
            "someone-else", "f1", FoodUpdate(name="Calzone", cook_time_minutes=15, price=9.0)
        )

        assert food_service.peek_foods_for_restaurant("r1") is UNKNOWN
        menu = await food_service.list_foods_for_restaurant("r1")
        assert menu[0].name == "Calzone"

    @pytest.mark.asyncio
    async def test_invalidates_menu_and_replaces_entry(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await seed_food(backend, "f1", "r1")
        await food_service.list_foods_for_restaurant("r1")
        await food_service.get_food_by_id("f1")

        updated = await food_service.update_food(
            "r1", "f1", FoodUpdate(name="Diavola", cook_time_minutes=12, price=9.5)
        )

        assert updated.name == "Diavola"
        assert updated.image_file_id == "img"
        assert food_service.peek_foods_for_restaurant("r1") is UNKNOWN
        assert food_service.peek_food_by_id("f1") == Found(updated)

        menu = await food_service.list_foods_for_restaurant("r1")
        assert menu[0].name == "Diavola"

    @pytest.mark.asyncio
    async def test_available_untouched_when_none(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await backend.create_document(
            FOODS, "f1", {"restaurantUserId": "r1", "name": "Pizza", "available": False}
        )

        updated = await food_service.update_food(
            "r1", "f1", FoodUpdate(name="Pizza", cook_time_minutes=1, price=1.0)
        )

        assert updated.available is False

    @pytest.mark.asyncio
    async def test_requires_food_id(self, food_service: FoodService) -> None:
        with pytest.raises(InvalidInputError, match="Missing food id."):
            await food_service.update_food(
                "r1", "", FoodUpdate(name="X", cook_time_minutes=1, price=1.0)
            )

    @pytest.mark.asyncio
    async def test_missing_food(self, food_service: FoodService) -> None:
        with pytest.raises(NotFoundError):
            await food_service.update_food(
                "r1", "ghost", FoodUpdate(name="X", cook_time_minutes=1, price=1.0)
            )


class TestDeleteFood:
    @pytest.mark.asyncio
    async def test_invalidates_both_families(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await seed_food(backend, "f1", "r1")
        await food_service.list_foods_for_restaurant("r1")
        await food_service.get_food_by_id("f1")

        await food_service.delete_food("r1", "f1")

        assert food_service.peek_foods_for_restaurant("r1") is UNKNOWN
        assert food_service.peek_food_by_id("f1") is UNKNOWN
        assert await food_service.list_foods_for_restaurant("r1") == []
        assert await food_service.get_food_by_id("f1") is None

    @pytest.mark.asyncio
    async def test_empty_food_id_is_noop(
        self, food_service: FoodService, backend: InMemoryDocumentBackend
    ) -> None:
        await food_service.delete_food("r1", "")
        assert backend.calls["delete_document"] == 0

    @pytest.mark.asyncio
    async def test_failure_leaves_caches_untouched(
        self, cache: CatalogCache, settings: CatalogSettings, mock_backend: AsyncMock
    ) -> None:
        service = FoodService(mock_backend, cache, settings)
        await service.list_foods_for_restaurant("r1")
        await service.get_food_by_id("f1")
        mock_backend.delete_document.side_effect = BackendError("offline")

        with pytest.raises(BackendError):
            await service.delete_food("r1", "f1")

        assert isinstance(service.peek_foods_for_restaurant("r1"), Found)
        assert isinstance(service.peek_food_by_id("f1"), Found)


class TestFoodImages:
    def test_view_url(self, food_service: FoodService) -> None:
        assert food_service.get_food_image_view_url("img1") == "memory://food-images/img1"

    def test_no_file_id(self, food_service: FoodService) -> None:
        assert food_service.get_food_image_view_url("") is None

    def test_no_storage(self, cache: CatalogCache, settings: CatalogSettings) -> None:
        service = FoodService(AsyncMock(), cache, settings)
        assert service.get_food_image_view_url("img1") is None
