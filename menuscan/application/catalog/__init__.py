"""Catalog services: restaurants, foods and reviews."""

from menuscan.application.catalog.foods import FoodService
from menuscan.application.catalog.restaurants import RestaurantService
from menuscan.application.catalog.reviews import ReviewService

__all__ = [
    "FoodService",
    "RestaurantService",
    "ReviewService",
]
