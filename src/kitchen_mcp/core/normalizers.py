"""Normalizers from HEB GraphQL responses to the internal models.

HEB response field names do not follow the request operation names, and
carry version suffixes that differ between operations (the add mutation
is `addToShoppingListV2` but answers under `addShoppingListItemsV2`).
Each mapping is spelled out per operation; do not derive one from another.

Every function here is pure and tolerant of sparse payloads: missing arrays
read as empty and missing nested objects leave optional fields unset. The
only raise is when the top-level object an operation exists to return is
absent.
"""

from __future__ import annotations

from typing import Any, Optional

from .errors import HEBError, NotFoundError
from .models import (
    Availability,
    ListMutationResult,
    Product,
    ShoppingList,
    ShoppingListDetail,
    ShoppingListItem,
)

# Response fields per operation.
SEARCH_FIELD = "productSearchItems"
LISTS_FIELD = "getShoppingListsV2"
LIST_FIELD = "getShoppingListV2"
ADD_FIELD = "addShoppingListItemsV2"
REMOVE_FIELD = "deleteShoppingListItemsV2"
UPDATE_FIELD = "updateShoppingListItemV2"

PREFERRED_IMAGE_SIZE = "MEDIUM"
ONLINE_PRICE_CONTEXT = "ONLINE"


def _obj(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _opt_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def select_image_url(images: Any) -> Optional[str]:
    """Pick the MEDIUM image if present, else the first one, else None."""
    entries = [img for img in _list(images) if isinstance(img, dict)]
    for img in entries:
        if img.get("size") == PREFERRED_IMAGE_SIZE and img.get("url"):
            return img["url"]
    if entries and entries[0].get("url"):
        return entries[0]["url"]
    return None


def map_availability(state: Any) -> Availability:
    if state == "IN_STOCK":
        return Availability.IN_STOCK
    if state == "LOW_STOCK":
        return Availability.LOW_STOCK
    return Availability.OUT_OF_STOCK


def _online_price(sku: dict) -> Optional[float]:
    for entry in _list(sku.get("contextPrices")):
        if isinstance(entry, dict) and entry.get("context") == ONLINE_PRICE_CONTEXT:
            return _opt_float(_obj(entry.get("salePrice")).get("amount"))
    return None


# ─── Product search ──────────────────────────────────────────────────────────


def normalize_product(raw: dict) -> Product:
    """Map one search-grid item.

    fullDisplayName → name; price from the first SKU's ONLINE context price;
    size from the first SKU's customerFriendlySize.
    """
    skus = [s for s in _list(raw.get("SKUs")) if isinstance(s, dict)]
    first_sku = skus[0] if skus else {}

    return Product(
        product_id=str(raw.get("id", "")),
        name=str(raw.get("fullDisplayName") or ""),
        price=_online_price(first_sku),
        image_url=select_image_url(raw.get("productImageUrls")),
        brand=_opt_str(_obj(raw.get("brand")).get("name")),
        size=_opt_str(first_sku.get("customerFriendlySize")),
        availability=map_availability(_obj(raw.get("inventory")).get("inventoryState")),
    )


def normalize_search_response(data: dict) -> list[Product]:
    items = _list(_obj(_obj(_obj(data).get(SEARCH_FIELD)).get("searchGrid")).get("items"))
    return [normalize_product(item) for item in items if isinstance(item, dict)]


# ─── Shopping lists ──────────────────────────────────────────────────────────


def normalize_shopping_list(raw: dict) -> ShoppingList:
    """totalItemCount → itemCount, created → createdAt, updated → updatedAt."""
    return ShoppingList(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        item_count=_int(raw.get("totalItemCount")),
        created_at=_opt_str(raw.get("created")),
        updated_at=_opt_str(raw.get("updated")),
    )


def normalize_shopping_lists_response(data: dict) -> list[ShoppingList]:
    lists = _list(_obj(_obj(data).get(LISTS_FIELD)).get("lists"))
    return [normalize_shopping_list(raw) for raw in lists if isinstance(raw, dict)]


def normalize_list_item(raw: dict) -> ShoppingListItem:
    """product.fullDisplayName → name, product.id → productId, itemPrice.salePrice → price."""
    product = _obj(raw.get("product"))
    quantity = raw.get("quantity")
    return ShoppingListItem(
        id=str(raw.get("id", "")),
        product_id=str(product.get("id", "")),
        name=str(product.get("fullDisplayName") or ""),
        quantity=quantity if isinstance(quantity, int) and quantity > 0 else 1,
        checked=bool(raw.get("checked", False)),
        price=_opt_float(_obj(raw.get("itemPrice")).get("salePrice")),
        image_url=select_image_url(product.get("productImageUrls")),
    )


def normalize_shopping_list_response(data: dict, list_id: Optional[str] = None) -> ShoppingListDetail:
    raw = _obj(data).get(LIST_FIELD)
    if not isinstance(raw, dict):
        raise NotFoundError("Shopping list", list_id)

    item_page = _obj(raw.get("itemPage"))
    items = [normalize_list_item(item) for item in _list(item_page.get("items")) if isinstance(item, dict)]

    return ShoppingListDetail(
        id=str(raw.get("id", list_id or "")),
        name=str(raw.get("name") or ""),
        item_count=_int(_obj(item_page.get("thisPage")).get("totalCount")),
        created_at=_opt_str(raw.get("created")),
        updated_at=_opt_str(raw.get("updated")),
        items=items,
    )


def normalize_mutation_response(data: dict, field: str, action: str) -> ListMutationResult:
    """Read the list summary a mutation returns under `field`."""
    raw = _obj(data).get(field)
    if not isinstance(raw, dict):
        raise HEBError(f"Failed to {action}")
    count = raw.get("totalItemCount")
    return ListMutationResult(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        item_count=int(count) if isinstance(count, (int, float)) and not isinstance(count, bool) else None,
    )
