"""Persisted-query request builders for the HEB GraphQL API.

HEB resolves each request by the SHA-256 hash of a query it has registered,
so the query text is never sent. The hashes below must match the upstream
registry exactly or the call fails server-side.

Builders are pure: the same inputs always produce the same payload.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .models import GraphQLRequest, PersistedQuery, QueryExtensions

QUERY_HASHES: dict[str, str] = {
    "productSearchItems": "fb40e1079a8d12236ed91e90dfe7dccbccbf416645e19b46affb880c88b7af8f",
    "typeaheadContent": "1ed956c0f10efcfc375321f33c40964bc236fff1397a4e86b7b53cb3b18ad329",
    "getShoppingListsV2": "954a24fe9f3cf6f904fdb602b412e355271dbc8b919303ae84c8328e555e99fa",
    "getShoppingListV2": "085fcaef4f2f05ee16ea44c1489801e7ae7e7a95311cbf6d7a3f09135f0ea557",
    "addToShoppingListV2": "6b1534f6270004656ac14944f790a993822fba67fe24c9558713016cea2217c8",
    "deleteShoppingListItems": "d680a2e6c47fe0f832af2628378af8e17da7d448c46b15e799d609a56aa13e69",
    "updateShoppingListItem": "b57aa69ab197bcc3bface2afe47ff8b778eb1313c5caa479d41d40385af61818",
}

SHOPPING_CONTEXT = "EXPLORE_MY_STORE"
LIST_PAGE_SIZE = 500
LIST_SORT = {"sort": "CATEGORY", "sortDirection": "ASC"}


def persisted_query(operation_name: str, variables: dict[str, Any]) -> GraphQLRequest:
    """Wrap variables in the persisted-query envelope. Unknown names raise KeyError."""
    return GraphQLRequest(
        operation_name=operation_name,
        variables=variables,
        extensions=QueryExtensions(
            persisted_query=PersistedQuery(version=1, sha256_hash=QUERY_HASHES[operation_name]),
        ),
    )


def build_search_products_query(term: str, max_results: int, store_id: int) -> GraphQLRequest:
    return persisted_query("productSearchItems", {
        "includeUnitPriceDiff": False,
        "userIsLoggedIn": True,
        "params": {
            "addressAllowAlcohol": False,
            "doNotSuggestPhrase": False,
            "ignoreRules": False,
            "ignoreSynonyms": False,
            "includeFullCategoryHierarchy": False,
            "pageIndex": 0,
            "pageSize": max_results,
            "query": term,
            "shoppingContext": SHOPPING_CONTEXT,
            "sortBy": "SCORE",
            "sortDirection": "DESC",
            "storeId": store_id,
            "timeSlotStartTime": None,
        },
        "storeId": store_id,
        "shoppingContext": SHOPPING_CONTEXT,
        "searchMode": "SHOPPING_LIST_SEARCH",
        "searchContextToken": None,
        "searchPageLayout": "MOBILE_WEB_SEARCH_PAGE_LAYOUT",
    })


def build_get_shopping_lists_query() -> GraphQLRequest:
    return persisted_query("getShoppingListsV2", {})


def build_get_shopping_list_query(list_id: str) -> GraphQLRequest:
    return persisted_query("getShoppingListV2", {
        "input": {
            "id": list_id,
            "page": {"page": 0, "size": LIST_PAGE_SIZE, **LIST_SORT},
        },
    })


def expand_quantities(
    product_ids: Sequence[str],
    quantities: Optional[Sequence[int]] = None,
) -> list[str]:
    """Repeat each product id by its quantity, keeping input order.

    The add mutation has no quantity field; every entry adds one unit.
    Missing (or falsy) quantities count as 1.
    """
    quantities = quantities or ()
    expanded: list[str] = []
    for index, product_id in enumerate(product_ids):
        qty = quantities[index] if index < len(quantities) else 1
        expanded.extend([product_id] * (qty or 1))
    return expanded


def build_add_to_list_query(
    list_id: str,
    product_ids: Sequence[str],
    quantities: Optional[Sequence[int]] = None,
) -> GraphQLRequest:
    list_items = [{"item": {"productId": pid}} for pid in expand_quantities(product_ids, quantities)]
    return persisted_query("addToShoppingListV2", {
        "input": {
            "listId": list_id,
            "listItems": list_items,
            "page": dict(LIST_SORT),
        },
    })


def build_remove_from_list_query(list_id: str, item_ids: Sequence[str]) -> GraphQLRequest:
    return persisted_query("deleteShoppingListItems", {
        "input": {
            "listId": list_id,
            "itemIds": list(item_ids),
            "page": dict(LIST_SORT),
        },
    })


def build_update_item_quantity_query(list_id: str, item_id: str, quantity: int) -> GraphQLRequest:
    return persisted_query("updateShoppingListItem", {
        "input": {
            "itemId": item_id,
            "listId": list_id,
            "quantityOrWeight": {"quantity": quantity},
            "page": dict(LIST_SORT),
        },
    })
