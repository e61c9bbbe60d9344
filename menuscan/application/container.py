"""Service wiring.

Builds the catalog services around one shared CatalogCache, so that a
mutation through any service invalidates what the others read. Every
collaborator can be injected; missing ones come from the environment-based
factories and the process-wide cache.

Usage:
    from menuscan.application.container import create_catalog_services

    services = create_catalog_services()
    menu = await services.foods.list_foods_for_restaurant(restaurant_id)
"""

from dataclasses import dataclass
from typing import Optional

from menuscan.application.catalog.foods import FoodService
from menuscan.application.catalog.restaurants import RestaurantService
from menuscan.application.catalog.reviews import ReviewService
from menuscan.application.profile.preferences import ProfileService
from menuscan.config import CatalogSettings
from menuscan.domain.shared.ports.document_backend import IDocumentBackend
from menuscan.domain.shared.ports.file_storage import IFileStorage
from menuscan.domain.shared.ports.session_provider import ISessionProvider
from menuscan.infrastructure.backends.factory import (
    create_file_storage,
    create_session_provider,
    get_document_backend,
)
from menuscan.infrastructure.cache.registry import CatalogCache, get_catalog_cache


@dataclass(frozen=True)
class CatalogServices:
    """Services sharing one backend and one cache."""

    cache: CatalogCache
    restaurants: RestaurantService
    foods: FoodService
    reviews: ReviewService
    profile: ProfileService


def create_catalog_services(
    backend: Optional[IDocumentBackend] = None,
    cache: Optional[CatalogCache] = None,
    settings: Optional[CatalogSettings] = None,
    storage: Optional[IFileStorage] = None,
    session: Optional[ISessionProvider] = None,
) -> CatalogServices:
    """
    Wire the catalog services.

    Args:
        backend: Document backend (default: get_document_backend())
        cache: Cache registry (default: get_catalog_cache())
        settings: Collection identifiers (default: CatalogSettings.from_env())
        storage: File storage (default: create_file_storage())
        session: Session provider (default: create_session_provider())

    Returns:
        CatalogServices
    """
    backend = backend if backend is not None else get_document_backend()
    cache = cache if cache is not None else get_catalog_cache()
    settings = settings if settings is not None else CatalogSettings.from_env()
    storage = storage if storage is not None else create_file_storage()
    session = session if session is not None else create_session_provider()

    restaurants = RestaurantService(backend, cache, settings)
    return CatalogServices(
        cache=cache,
        restaurants=restaurants,
        foods=FoodService(backend, cache, settings, storage),
        reviews=ReviewService(backend, cache, settings),
        profile=ProfileService(session, restaurants),
    )
