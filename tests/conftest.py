"""Shared test fixtures.

Services are wired against InMemoryDocumentBackend and a CatalogCache
driven by a fake clock, so TTL behaviour is tested without sleeping.
"""

from __future__ import annotations

from typing import Generator

import pytest

from menuscan.application.catalog.foods import FoodService
from menuscan.application.catalog.restaurants import RestaurantService
from menuscan.application.catalog.reviews import ReviewService
from menuscan.config import CatalogSettings
from menuscan.infrastructure.backends.factory import reset_document_backend
from menuscan.infrastructure.backends.in_memory import InMemoryDocumentBackend
from menuscan.infrastructure.backends.in_memory_storage import InMemoryFileStorage
from menuscan.infrastructure.cache.registry import CatalogCache, reset_catalog_cache

RESTAURANTS = "restaurants"
FOODS = "foods"
REVIEWS = "reviews"


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the process-wide cache, backend and backend env vars."""
    for name in ("DOCUMENT_BACKEND", "APPWRITE_SESSION"):
        monkeypatch.delenv(name, raising=False)
    reset_catalog_cache()
    reset_document_backend()
    yield
    reset_catalog_cache()
    reset_document_backend()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CatalogCache:
    return CatalogCache(clock=clock)


@pytest.fixture
def backend() -> InMemoryDocumentBackend:
    return InMemoryDocumentBackend()


@pytest.fixture
def settings() -> CatalogSettings:
    return CatalogSettings(
        database_id="main",
        restaurants_collection_id=RESTAURANTS,
        foods_collection_id=FOODS,
        reviews_collection_id=REVIEWS,
        food_images_bucket_id="food-images",
    )


@pytest.fixture
def restaurant_service(
    backend: InMemoryDocumentBackend, cache: CatalogCache, settings: CatalogSettings
) -> RestaurantService:
    return RestaurantService(backend, cache, settings)


@pytest.fixture
def food_service(
    backend: InMemoryDocumentBackend, cache: CatalogCache, settings: CatalogSettings
) -> FoodService:
    return FoodService(backend, cache, settings, InMemoryFileStorage())


@pytest.fixture
def review_service(
    backend: InMemoryDocumentBackend, cache: CatalogCache, settings: CatalogSettings
) -> ReviewService:
    return ReviewService(backend, cache, settings)
