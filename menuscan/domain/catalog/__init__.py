"""Catalog domain: restaurants, foods, reviews and customer preferences."""

from menuscan.domain.catalog.filters import IngredientMatches, PriceRange, match_ingredients
from menuscan.domain.catalog.models import (
    Food,
    FoodInput,
    FoodUpdate,
    Restaurant,
    Review,
    ReviewInput,
    UserPrefs,
    UserRole,
    UserSession,
)
from menuscan.domain.catalog.ratings import (
    RatingSummary,
    find_review_by_customer,
    summarize_ratings,
)

__all__ = [
    "Food",
    "FoodInput",
    "FoodUpdate",
    "IngredientMatches",
    "PriceRange",
    "RatingSummary",
    "Restaurant",
    "Review",
    "ReviewInput",
    "UserPrefs",
    "UserRole",
    "UserSession",
    "find_review_by_customer",
    "match_ingredients",
    "summarize_ratings",
]
