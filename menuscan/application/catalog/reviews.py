"""Food reviews: cached lists, rating summaries and review mutations.

Review lists are always refetched in full after a mutation rather than
patched in place, because the average rating is computed from the whole
list.
"""

import logging
from typing import List, Optional

from menuscan.config import CatalogSettings
from menuscan.domain.catalog.models import Review, ReviewInput
from menuscan.domain.catalog.ratings import (
    RatingSummary,
    find_review_by_customer,
    summarize_ratings,
)
from menuscan.domain.shared.errors import InvalidInputError, NotFoundError
from menuscan.domain.shared.ids import new_document_id
from menuscan.domain.shared.ports.document_backend import IDocumentBackend
from menuscan.domain.shared.query import Equal, OrderDesc
from menuscan.infrastructure.cache.keys import reviews_for_food_key
from menuscan.infrastructure.cache.registry import CatalogCache
from menuscan.infrastructure.cache.ttl_cache import UNKNOWN, CacheResult, Found, as_list

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _validate_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidInputError(f"Rating must be a whole number, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidInputError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
        )
    return rating


class ReviewService:
    """Read-through access to review lists plus review mutations."""

    def __init__(
        self,
        backend: IDocumentBackend,
        cache: CatalogCache,
        settings: CatalogSettings,
    ) -> None:
        self._backend = backend
        self._cache = cache
        self._settings = settings

    def peek_reviews_for_food(self, food_id: str) -> CacheResult[List[Review]]:
        """Cached reviews of a food (newest first), UNKNOWN if not cached."""
        if not food_id:
            return UNKNOWN
        return as_list(self._cache.reviews_for_food.get(reviews_for_food_key(food_id)))

    async def list_reviews_for_food(self, food_id: str) -> List[Review]:
        """
        Fetch the reviews of a food, newest first, consulting the cache first.

        A missing reviews collection yields an empty, uncached list so the
        detail screen works before reviews are set up.

        Raises:
            ConfigurationError: If the reviews collection is not configured
            BackendError: On backend failure (nothing cached)
        """
        if not food_id:
            return []

        collection = self._settings.require_reviews()
        key = reviews_for_food_key(food_id)
        cached = self._cache.reviews_for_food.get(key)
        if isinstance(cached, Found):
            return list(cached.value)

        try:
            docs = await self._backend.list_documents(
                collection,
                [Equal.of("foodId", food_id), OrderDesc("$createdAt")],
            )
        except NotFoundError:
            logger.warning(
                "Reviews collection not found, returning no reviews",
                extra={"collection": collection, "food_id": food_id},
            )
            return []

        reviews = [Review.model_validate(doc) for doc in docs]
        self._cache.reviews_for_food.set(key, tuple(reviews), self._cache.ttls.reviews_for_food)
        return reviews

    async def get_rating_summary(self, food_id: str) -> RatingSummary:
        """Average rating of a food, computed from its full review list."""
        return summarize_ratings(await self.list_reviews_for_food(food_id))

    def peek_rating_summary(self, food_id: str) -> CacheResult[RatingSummary]:
        """Rating summary from cached reviews only, UNKNOWN if not cached."""
        cached = self.peek_reviews_for_food(food_id)
        if isinstance(cached, Found):
            return Found(summarize_ratings(cached.value))
        return UNKNOWN

    async def create_review(self, review: ReviewInput) -> Review:
        """
        Post a new review and invalidate the food's review list.

        Raises:
            ConfigurationError: If the reviews collection is not configured
            BackendError: On backend failure (cache untouched)
        """
        collection = self._settings.require_reviews()
        doc = await self._backend.create_document(
            collection, new_document_id(), review.to_document()
        )
        created = Review.model_validate(doc)

        self._cache.reviews_for_food.delete(reviews_for_food_key(review.food_id))
        logger.info(
            "Review created",
            extra={"review_id": created.id, "food_id": review.food_id},
        )
        return created

    async def update_review(
        self, review_id: str, food_id: str, rating: int, comment: str
    ) -> Review:
        """
        Change rating and comment of an existing review.

        Raises:
            ConfigurationError: If the reviews collection is not configured
            InvalidInputError: If review_id is empty or rating is out of range
            NotFoundError: If the review does not exist
            BackendError: On backend failure (cache untouched)
        """
        collection = self._settings.require_reviews()
        if not review_id:
            raise InvalidInputError("Missing review id.")
        _validate_rating(rating)

        doc = await self._backend.update_document(
            collection, review_id, {"rating": rating, "comment": comment.strip()}
        )
        updated = Review.model_validate(doc)

        self._cache.reviews_for_food.delete(reviews_for_food_key(food_id))
        logger.info(
            "Review updated",
            extra={"review_id": review_id, "food_id": food_id},
        )
        return updated

    async def delete_review(self, review_id: str, food_id: str) -> None:
        """
        Delete a review and invalidate the food's review list.

        Raises:
            ConfigurationError: If the reviews collection is not configured
            NotFoundError: If the review does not exist
            BackendError: On backend failure (cache untouched)
        """
        collection = self._settings.require_reviews()
        if not review_id:
            return

        await self._backend.delete_document(collection, review_id)

        self._cache.reviews_for_food.delete(reviews_for_food_key(food_id))
        logger.info(
            "Review deleted",
            extra={"review_id": review_id, "food_id": food_id},
        )

    async def save_customer_review(self, review: ReviewInput) -> Review:
        """
        Create the customer's review, or update it if they already left one.

        One review per customer and food: the existing review is found in
        the (possibly cached) review list.
        """
        existing: Optional[Review] = find_review_by_customer(
            await self.list_reviews_for_food(review.food_id), review.customer_id
        )
        if existing is None:
            return await self.create_review(review)
        return await self.update_review(
            existing.id, review.food_id, review.rating, review.comment
        )
