"""Rating aggregation for the food detail screen.

Average ratings are always computed from the full review list, which is
why review mutations invalidate the whole cached list instead of patching it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from menuscan.domain.catalog.models import Review


@dataclass(frozen=True)
class RatingSummary:
    """
    Aggregated star rating.

    Attributes:
        count: Number of reviews
        average: Mean rating (0.0 with no reviews)
        filled_stars: Average rounded half-up to whole stars (0-5)
    """

    count: int
    average: float
    filled_stars: int

    @property
    def has_ratings(self) -> bool:
        return self.count > 0

    def label(self) -> str:
        """Short text such as ``"4.5 (2 reviews)"``."""
        if not self.has_ratings:
            return "No ratings yet"
        noun = "review" if self.count == 1 else "reviews"
        return f"{self.average:.1f} ({self.count} {noun})"


def summarize_ratings(reviews: Sequence[Review]) -> RatingSummary:
    """
    Compute the average rating of a review list.

    Example:
        >>> summarize_ratings([]).label()
        'No ratings yet'
    """
    if not reviews:
        return RatingSummary(count=0, average=0.0, filled_stars=0)

    average = sum(r.rating for r in reviews) / len(reviews)
    filled = int(Decimal(str(average)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return RatingSummary(count=len(reviews), average=average, filled_stars=filled)


def find_review_by_customer(
    reviews: Sequence[Review], customer_id: str
) -> Optional[Review]:
    """Return the customer's own review, if they already left one."""
    if not customer_id:
        return None
    for review in reviews:
        if review.customer_id == customer_id:
            return review
    return None
