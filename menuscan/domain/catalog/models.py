"""
Catalog entities.

Pydantic models parsed from backend documents. Backend field names are
camelCase and system fields are ``$``-prefixed; the models expose
snake_case attributes and accept either spelling on input.

Example:
    >>> food = Food.model_validate({
    ...     "$id": "f1",
    ...     "restaurantUserId": "r1",
    ...     "name": "Margherita",
    ...     "ingredients": ["tomato", "mozzarella"],
    ...     "cookTimeMinutes": 12,
    ...     "price": 8.5,
    ...     "imageFileId": "img1",
    ... })
    >>> food.available
    True
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_strings(values: List[str]) -> List[str]:
    """Strip entries and drop blanks."""
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


class _Document(BaseModel):
    """Fields every backend document carries."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="$id", min_length=1)
    created_at: Optional[datetime] = Field(None, alias="$createdAt")
    updated_at: Optional[datetime] = Field(None, alias="$updatedAt")


# ═══════════════════════════════════════════════════════════
# RESTAURANTS
# ═══════════════════════════════════════════════════════════


class Restaurant(_Document):
    """Restaurant profile. The document id is the operator's user id."""

    name: str = ""


# ═══════════════════════════════════════════════════════════
# FOODS
# ═══════════════════════════════════════════════════════════


class FoodInput(BaseModel):
    """
    Data needed to create a menu item.

    Validation mirrors the add-food form: non-empty name, non-negative
    price and cooking time.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    ingredients: List[str] = Field(default_factory=list)
    cook_time_minutes: int = Field(..., ge=0, alias="cookTimeMinutes")
    price: float = Field(..., ge=0)
    image_file_id: str = Field(..., alias="imageFileId")
    available: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Ensure name is not whitespace."""
        if not v.strip():
            raise ValueError("Food name cannot be empty")
        return v.strip()

    @field_validator("ingredients")
    @classmethod
    def clean_ingredients(cls, v: List[str]) -> List[str]:
        """Drop blank ingredients."""
        return _clean_strings(v)

    def to_document(self, restaurant_user_id: str) -> Dict[str, Any]:
        """Map to backend fields explicitly so no extra keys are sent."""
        return {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "cookTimeMinutes": self.cook_time_minutes,
            "price": self.price,
            "imageFileId": self.image_file_id,
            "available": self.available,
            "restaurantUserId": restaurant_user_id,
        }


class FoodUpdate(BaseModel):
    """Editable menu item fields. The image cannot be changed after creation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    ingredients: List[str] = Field(default_factory=list)
    cook_time_minutes: int = Field(..., ge=0, alias="cookTimeMinutes")
    price: float = Field(..., ge=0)
    available: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Ensure name is not whitespace."""
        if not v.strip():
            raise ValueError("Food name cannot be empty")
        return v.strip()

    @field_validator("ingredients")
    @classmethod
    def clean_ingredients(cls, v: List[str]) -> List[str]:
        """Drop blank ingredients."""
        return _clean_strings(v)

    def to_patch(self) -> Dict[str, Any]:
        """Map to backend fields; ``available`` is left untouched when None."""
        patch: Dict[str, Any] = {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "cookTimeMinutes": self.cook_time_minutes,
            "price": self.price,
        }
        if self.available is not None:
            patch["available"] = self.available
        return patch


class Food(_Document):
    """Menu item document."""

    restaurant_user_id: str = Field(..., alias="restaurantUserId")
    name: str
    ingredients: List[str] = Field(default_factory=list)
    cook_time_minutes: int = Field(0, alias="cookTimeMinutes")
    price: float = 0.0
    image_file_id: str = Field("", alias="imageFileId")
    available: bool = True

    @field_validator("available", mode="before")
    @classmethod
    def default_available(cls, v: Any) -> Any:
        """Older documents predate the attribute; treat null as available."""
        return True if v is None else v


# ═══════════════════════════════════════════════════════════
# REVIEWS
# ═══════════════════════════════════════════════════════════


class ReviewInput(BaseModel):
    """Data needed to post a star rating."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    food_id: str = Field(..., min_length=1, alias="foodId")
    restaurant_user_id: str = Field(..., alias="restaurantUserId")
    customer_id: str = Field(..., min_length=1, alias="customerId")
    customer_name: str = Field("", alias="customerName")
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""

    def to_document(self) -> Dict[str, Any]:
        """Map to backend fields."""
        return {
            "foodId": self.food_id,
            "restaurantUserId": self.restaurant_user_id,
            "customerId": self.customer_id,
            "customerName": self.customer_name,
            "rating": self.rating,
            "comment": self.comment.strip(),
        }


class Review(_Document):
    """Review document (1-5 stars plus an optional comment)."""

    food_id: str = Field(..., alias="foodId")
    restaurant_user_id: str = Field("", alias="restaurantUserId")
    customer_id: str = Field(..., alias="customerId")
    customer_name: str = Field("", alias="customerName")
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""


# ═══════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════


class UserRole(str, Enum):
    """Account type chosen at sign-up."""

    CUSTOMER = "customer"
    RESTAURANT = "restaurant"


class UserPrefs(BaseModel):
    """Per-user preferences stored on the session provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    role: Optional[UserRole] = None
    scanned_restaurant_ids: List[str] = Field(
        default_factory=list, alias="scannedRestaurantIds"
    )
    allergic_ingredients: List[str] = Field(
        default_factory=list, alias="allergicIngredients"
    )
    disliked_ingredients: List[str] = Field(
        default_factory=list, alias="dislikedIngredients"
    )

    @field_validator(
        "scanned_restaurant_ids",
        "allergic_ingredients",
        "disliked_ingredients",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """Missing lists come back as null from older accounts."""
        return [] if v is None else _clean_strings(list(v))

    def to_document(self) -> Dict[str, Any]:
        """Serialize with backend (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserSession(BaseModel):
    """Signed-in account."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="$id")
    name: str = ""
    email: str = ""
    prefs: UserPrefs = Field(default_factory=UserPrefs)

    @property
    def role(self) -> Optional[UserRole]:
        """Shortcut for prefs.role."""
        return self.prefs.role
