"""Pydantic data models: the normalized shapes returned by every tool.

Fields are snake_case in Python and serialize with camelCase aliases, which
is the shape tool callers see. Use `to_payload()` to serialize: absent
optional fields are dropped rather than emitted as null.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Availability(str, Enum):
    """Normalized stock state of a product."""

    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


# ─── HEB shopping ────────────────────────────────────────────────────────────


class Product(_Model):
    """A product from an HEB search."""

    product_id: str
    name: str
    price: Optional[float] = Field(None, description="Online sale price in dollars")
    image_url: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = Field(None, description="Customer-friendly size, e.g. '12 ct'")
    availability: Availability = Availability.OUT_OF_STOCK


class ShoppingList(_Model):
    """Shopping list summary."""

    id: str
    name: str
    item_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ShoppingListItem(_Model):
    """An entry on a shopping list. `id` is the list item id, not the product id."""

    id: str
    product_id: str
    name: str
    quantity: int = Field(1, ge=1)
    checked: bool = False
    price: Optional[float] = None
    image_url: Optional[str] = None


class ShoppingListDetail(ShoppingList):
    items: list[ShoppingListItem] = Field(default_factory=list)


class ListMutationResult(_Model):
    """List summary echoed back by add/remove/update mutations."""

    id: str
    name: str
    item_count: Optional[int] = None


class AddToListResult(_Model):
    success: bool = True
    product_id: str
    product_name: str
    quantity: int
    list_id: str
    list_name: str
    message: str


class RemoveFromListResult(_Model):
    success: bool = True
    removed_count: int
    list_id: str
    list_name: str
    message: str


class UpdateItemQuantityResult(_Model):
    success: bool = True
    item_id: str
    quantity: int
    list_id: str
    list_name: str
    message: str


# ─── GraphQL wire envelope ───────────────────────────────────────────────────


class PersistedQuery(_Model):
    version: int = 1
    sha256_hash: str = Field(alias="sha256Hash")


class QueryExtensions(_Model):
    persisted_query: PersistedQuery


class GraphQLRequest(_Model):
    """Persisted-query request body sent to the GraphQL endpoint."""

    operation_name: str
    variables: dict[str, Any] = Field(default_factory=dict)
    extensions: QueryExtensions

    def to_payload(self) -> dict[str, Any]:
        # variables go on the wire verbatim, including explicit nulls
        return self.model_dump(mode="json", by_alias=True)


# ─── AllRecipes ──────────────────────────────────────────────────────────────


class Nutrition(_Model):
    """Per-serving nutrition facts, kept as the free text the site publishes."""

    calories: Optional[str] = None
    fat: Optional[str] = None
    saturated_fat: Optional[str] = None
    unsaturated_fat: Optional[str] = None
    carbs: Optional[str] = None
    sugar: Optional[str] = None
    fiber: Optional[str] = None
    protein: Optional[str] = None
    cholesterol: Optional[str] = None
    sodium: Optional[str] = None


class Recipe(_Model):
    """A full recipe."""

    id: str
    name: str
    url: str
    description: Optional[str] = None
    author: Optional[str] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    total_time: Optional[str] = None
    servings: Optional[str] = None
    calories: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0.0, le=5.0)
    review_count: Optional[int] = None
    image_url: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    nutrition: Optional[Nutrition] = None


class RecipeSearchResult(_Model):
    """Lightweight search hit, used before fetching the full Recipe."""

    id: str
    title: str
    url: str
    image_url: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    description: Optional[str] = None
