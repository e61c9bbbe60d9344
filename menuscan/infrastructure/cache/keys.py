"""
Cache key construction for each catalog family.

Keys carry a family prefix so they stay unambiguous even if two families
ever shared one store. Multi-id restaurant lookups are canonicalized so the
same set of ids hits the same entry whatever the request order.

Example:
    >>> restaurants_key(["b", "a", "b"])
    'restaurantsByIds:a,b'
    >>> food_by_id_key("f1")
    'foodById:f1'
"""

from typing import Iterable, List

RESTAURANTS_PREFIX = "restaurantsByIds"
FOODS_FOR_RESTAURANT_PREFIX = "foodsForRestaurant"
FOOD_BY_ID_PREFIX = "foodById"
REVIEWS_FOR_FOOD_PREFIX = "reviewsForFood"

ID_SEPARATOR = ","


def normalize_ids(ids: Iterable[str]) -> List[str]:
    """Drop empty ids, de-duplicate and sort lexicographically."""
    return sorted({i for i in ids if i})


def restaurants_key(ids: Iterable[str]) -> str:
    """Key for a restaurants-by-ids lookup (order independent)."""
    return f"{RESTAURANTS_PREFIX}:{ID_SEPARATOR.join(normalize_ids(ids))}"


def foods_for_restaurant_key(user_id: str) -> str:
    """Key for the menu of one restaurant (restaurant id == operator user id)."""
    return f"{FOODS_FOR_RESTAURANT_PREFIX}:{user_id}"


def food_by_id_key(food_id: str) -> str:
    """Key for a single food document."""
    return f"{FOOD_BY_ID_PREFIX}:{food_id}"


def reviews_for_food_key(food_id: str) -> str:
    """Key for the review list of one food."""
    return f"{REVIEWS_FOR_FOOD_PREFIX}:{food_id}"
