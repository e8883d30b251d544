"""Canned HEB GraphQL `data` objects for tests."""

from __future__ import annotations

from typing import Any

LIST_ID = "3f2b8c1e-9d4a-4e6b-8a7c-1b2c3d4e5f60"
ITEM_ID_EGGS = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"
ITEM_ID_MILK = "b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d6e"


def search_item(
    product_id: str = "12345",
    name: str = "HEB Organic Large Eggs",
    inventory_state: str = "IN_STOCK",
    **extra: Any,
) -> dict:
    item = {
        "id": product_id,
        "fullDisplayName": name,
        "SKUs": [
            {
                "contextPrices": [{"context": "ONLINE", "salePrice": {"amount": 3.99}}],
                "customerFriendlySize": "12 ct",
            }
        ],
        "inventory": {"inventoryState": inventory_state},
    }
    item.update(extra)
    return item


def search_envelope(*items: dict) -> dict:
    return {"productSearchItems": {"searchGrid": {"items": list(items)}}}


def list_item(item_id: str, name: str, quantity: int = 1, checked: bool = False, **product: Any) -> dict:
    return {
        "id": item_id,
        "product": {"id": "12345", "fullDisplayName": name, **product},
        "quantity": quantity,
        "checked": checked,
        "itemPrice": {"salePrice": 3.99},
    }


def list_envelope(*items: dict, list_id: str = LIST_ID, name: str = "My Groceries") -> dict:
    return {
        "getShoppingListV2": {
            "id": list_id,
            "name": name,
            "created": "2024-01-01T00:00:00Z",
            "updated": "2024-01-15T00:00:00Z",
            "itemPage": {"items": list(items), "thisPage": {"totalCount": len(items)}},
        }
    }


def mutation_envelope(field: str, list_id: str = LIST_ID, name: str = "My Groceries", count: int = 3) -> dict:
    return {field: {"id": list_id, "name": name, "totalItemCount": count}}
