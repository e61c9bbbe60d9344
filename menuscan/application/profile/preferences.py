"""Profile service.

Wraps the session provider: display name, role, scanned restaurants and
ingredient preferences. A restaurant operator's display name doubles as the
restaurant name, so renames are propagated to the restaurant profile.
"""

import logging
from typing import Dict, Iterable, List, Optional

from menuscan.application.catalog.restaurants import RestaurantService
from menuscan.domain.catalog.filters import IngredientMatches, match_ingredients
from menuscan.domain.catalog.models import Food, UserPrefs, UserRole, UserSession
from menuscan.domain.shared.errors import CatalogError, InvalidInputError
from menuscan.domain.shared.ports.session_provider import ISessionProvider

logger = logging.getLogger(__name__)


def unique_push(items: List[str], value: str) -> List[str]:
    """
    Append a trimmed value unless it is blank or already present.

    Comparison is case-insensitive; the spelling already in the list wins.

    Example:
        >>> unique_push(["Peanut"], " peanut ")
        ['Peanut']
    """
    candidate = value.strip()
    if not candidate:
        return list(items)
    key = candidate.lower()
    if any(str(x).strip().lower() == key for x in items):
        return list(items)
    return [*items, candidate]


def remove_item(items: List[str], value: str) -> List[str]:
    """Remove every case-insensitive match of value."""
    key = value.strip().lower()
    return [x for x in items if str(x).strip().lower() != key]


def _unique_all(values: Iterable[str]) -> List[str]:
    result: List[str] = []
    for value in values:
        result = unique_push(result, str(value))
    return result


class ProfileService:
    """Preferences and profile updates for the signed-in user."""

    def __init__(
        self,
        session: ISessionProvider,
        restaurants: RestaurantService,
    ) -> None:
        """
        Initialize service.

        Args:
            session: Session provider port
            restaurants: Used to keep the restaurant profile name in sync
        """
        self._session = session
        self._restaurants = restaurants

    async def get_current_user(self) -> Optional[UserSession]:
        return await self._session.get_current_user()

    async def get_prefs(self) -> UserPrefs:
        return await self._session.get_prefs()

    async def _save_prefs(self, prefs: UserPrefs) -> UserPrefs:
        await self._session.update_prefs(prefs)
        # Re-read so callers see what the provider actually stored
        return await self._session.get_prefs()

    async def record_scanned_restaurant(self, restaurant_id: str) -> UserPrefs:
        """
        Move a scanned restaurant to the front of the history.

        Returns:
            Updated preferences (unchanged when restaurant_id is blank)
        """
        prefs = await self.get_prefs()
        restaurant_id = restaurant_id.strip()
        if not restaurant_id:
            return prefs

        history = [restaurant_id] + [
            rid for rid in prefs.scanned_restaurant_ids if rid != restaurant_id
        ]
        if history == prefs.scanned_restaurant_ids:
            return prefs
        return await self._save_prefs(
            prefs.model_copy(update={"scanned_restaurant_ids": history})
        )

    async def update_ingredient_prefs(
        self,
        allergic: Optional[Iterable[str]] = None,
        disliked: Optional[Iterable[str]] = None,
    ) -> UserPrefs:
        """
        Replace the allergy and/or dislike lists.

        Entries are trimmed and de-duplicated case-insensitively. A None
        argument keeps the current list.
        """
        prefs = await self.get_prefs()
        update: Dict[str, List[str]] = {}
        if allergic is not None:
            update["allergic_ingredients"] = _unique_all(allergic)
        if disliked is not None:
            update["disliked_ingredients"] = _unique_all(disliked)
        if not update:
            return prefs
        return await self._save_prefs(prefs.model_copy(update=update))

    async def add_ingredient(self, value: str, allergic: bool = True) -> UserPrefs:
        """Add one allergy (or dislike) entry; no write when nothing changes."""
        prefs = await self.get_prefs()
        current = prefs.allergic_ingredients if allergic else prefs.disliked_ingredients
        updated = unique_push(current, value)
        if len(updated) == len(current):
            return prefs
        if allergic:
            return await self.update_ingredient_prefs(allergic=updated)
        return await self.update_ingredient_prefs(disliked=updated)

    async def remove_ingredient(self, value: str, allergic: bool = True) -> UserPrefs:
        """Remove one allergy (or dislike) entry."""
        prefs = await self.get_prefs()
        current = prefs.allergic_ingredients if allergic else prefs.disliked_ingredients
        updated = remove_item(current, value)
        if allergic:
            return await self.update_ingredient_prefs(allergic=updated)
        return await self.update_ingredient_prefs(disliked=updated)

    async def update_name(self, name: str) -> UserSession:
        """
        Change the display name.

        For restaurant operators the restaurant profile is renamed too, which
        clears the restaurants cache. A failed restaurant sync is logged and
        does not fail the rename.

        Raises:
            InvalidInputError: If name is blank
        """
        next_name = (name or "").strip()
        if not next_name:
            raise InvalidInputError("Name cannot be empty.")

        user = await self._session.update_name(next_name)

        if user.role == UserRole.RESTAURANT:
            try:
                await self._restaurants.upsert_restaurant(user.id, user.name)
            except CatalogError as e:
                logger.warning(
                    "Unable to sync restaurant profile",
                    extra={"user_id": user.id, "error": str(e)},
                )
        return user

    async def ingredient_conflicts(self, food: Food) -> IngredientMatches:
        """
        Allergy and dislike entries found in a food's ingredients.

        Only customers get warnings; operators and signed-out users get an
        empty result.
        """
        user = await self.get_current_user()
        if user is None or user.role != UserRole.CUSTOMER:
            return IngredientMatches()
        prefs = user.prefs
        return match_ingredients(
            food.ingredients, prefs.allergic_ingredients, prefs.disliked_ingredients
        )
