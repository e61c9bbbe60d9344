"""Menu filters used by the customer screens.

- PriceRange: min/max price filter typed by the customer
- match_ingredients: allergy and dislike warnings on the food detail screen
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from menuscan.domain.catalog.models import Food

# Needles shorter than this would match almost every ingredient
MIN_NEEDLE_LENGTH = 2


def _parse_price(text: Optional[str]) -> Optional[float]:
    """Parse a price bound. Blank -> None, invalid -> NaN."""
    raw = (text or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return math.nan
    if not math.isfinite(value) or value < 0:
        return math.nan
    return value


def _round_cents(value: float) -> int:
    """Round a price to whole cents, halves away from zero."""
    return int(Decimal(value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _to_cents(value: Optional[float]) -> Optional[int]:
    if value is None or math.isnan(value):
        return None
    return _round_cents(value)


@dataclass(frozen=True)
class PriceRange:
    """
    Inclusive price range compared in cents.

    A missing or invalid bound is ignored. A range whose minimum exceeds its
    maximum is invalid and filters nothing.

    Example:
        >>> PriceRange.parse("5", "").is_active
        True
        >>> PriceRange.parse("10", "5").is_valid
        False
    """

    min_cents: Optional[int] = None
    max_cents: Optional[int] = None

    @classmethod
    def parse(cls, min_text: Optional[str], max_text: Optional[str]) -> "PriceRange":
        return cls(
            min_cents=_to_cents(_parse_price(min_text)),
            max_cents=_to_cents(_parse_price(max_text)),
        )

    @property
    def is_valid(self) -> bool:
        if self.min_cents is None or self.max_cents is None:
            return True
        return self.min_cents <= self.max_cents

    @property
    def is_active(self) -> bool:
        has_bound = self.min_cents is not None or self.max_cents is not None
        return has_bound and self.is_valid

    def contains(self, price: float) -> bool:
        if not math.isfinite(price):
            return False
        cents = _round_cents(price)
        if self.min_cents is not None and cents < self.min_cents:
            return False
        if self.max_cents is not None and cents > self.max_cents:
            return False
        return True

    def apply(self, foods: Sequence[Food]) -> List[Food]:
        """Return the foods inside the range (all of them when inactive)."""
        if not self.is_active:
            return list(foods)
        return [food for food in foods if self.contains(food.price)]


@dataclass(frozen=True)
class IngredientMatches:
    """Preference entries found in a food's ingredient list."""

    allergic: List[str] = field(default_factory=list)
    disliked: List[str] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.allergic or self.disliked)


def _needles(values: Sequence[str]) -> List[str]:
    return [str(v).strip() for v in values if str(v).strip()]


def _contains_loose(haystack: str, needle: str) -> bool:
    h = haystack.lower()
    n = needle.lower()
    if not h or len(n) < MIN_NEEDLE_LENGTH:
        return False
    return n in h


def match_ingredients(
    ingredients: Sequence[str],
    allergic: Sequence[str],
    disliked: Sequence[str],
) -> IngredientMatches:
    """
    Find allergy and dislike entries contained in the ingredients.

    Matching is a case-insensitive substring test, so "nut" flags
    "hazelnut spread". Results keep the order of first match without
    duplicates.

    Example:
        >>> match_ingredients(["Peanut butter"], ["peanut"], []).allergic
        ['peanut']
    """
    ingredient_strings = _needles(ingredients)
    allergic_needles = _needles(allergic)
    disliked_needles = _needles(disliked)

    matches_allergic: List[str] = []
    matches_disliked: List[str] = []

    for ingredient in ingredient_strings:
        for needle in allergic_needles:
            if needle not in matches_allergic and _contains_loose(ingredient, needle):
                matches_allergic.append(needle)
        for needle in disliked_needles:
            if needle not in matches_disliked and _contains_loose(ingredient, needle):
                matches_disliked.append(needle)

    return IngredientMatches(allergic=matches_allergic, disliked=matches_disliked)
