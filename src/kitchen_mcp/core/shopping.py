"""HEB shopping operations: validate, build the query, execute, normalize.

Each function takes the long-lived GraphQL client and the settings
explicitly; nothing here holds state between calls.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from . import normalizers, queries
from .errors import NotFoundError, ValidationError
from .models import (
    AddToListResult,
    Product,
    RemoveFromListResult,
    ShoppingList,
    ShoppingListDetail,
    UpdateItemQuantityResult,
)
from .validation import (
    validate_item_id,
    validate_list_id,
    validate_non_empty,
    validate_positive,
    validate_product_id,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10


def resolve_list_id(list_id: Optional[str], default_list_id: Optional[str]) -> str:
    """Explicit list id, else the configured default, else a ValidationError."""
    if list_id:
        return validate_list_id(list_id)
    if not default_list_id:
        raise ValidationError("No list ID provided and HEB_DEFAULT_LIST_ID is not set")
    return validate_list_id(default_list_id)


async def search_products(
    client,
    settings,
    search_term: str,
    max_results: Optional[int] = DEFAULT_MAX_RESULTS,
) -> list[Product]:
    term = validate_non_empty(search_term, "Search term")
    limit = int(validate_positive(max_results, "Max results")) if max_results is not None else DEFAULT_MAX_RESULTS

    query = queries.build_search_products_query(term, limit, settings.store_number)
    data = await client.execute(query)
    products = normalizers.normalize_search_response(data)
    logger.info("Product search %r returned %d result(s)", term, len(products))
    return products


async def get_shopping_lists(client) -> list[ShoppingList]:
    data = await client.execute(queries.build_get_shopping_lists_query())
    return normalizers.normalize_shopping_lists_response(data)


async def get_list_items(client, settings, list_id: Optional[str] = None) -> ShoppingListDetail:
    resolved = resolve_list_id(list_id, settings.default_list_id)
    data = await client.execute(queries.build_get_shopping_list_query(resolved))
    return normalizers.normalize_shopping_list_response(data, resolved)


async def add_to_list(
    client,
    settings,
    product_id: Optional[str] = None,
    search_term: Optional[str] = None,
    quantity: int = 1,
    list_id: Optional[str] = None,
) -> AddToListResult:
    """Add a product to a list, by id or by the top search hit for a term.

    Quantity is sent as repeated single-unit entries; see
    `queries.expand_quantities`.
    """
    quantity = int(validate_positive(quantity, "Quantity"))
    resolved_list = resolve_list_id(list_id, settings.default_list_id)

    if product_id:
        resolved_product = validate_product_id(product_id)
        product_name = f"Product {resolved_product}"
    elif search_term and search_term.strip():
        hits = await search_products(client, settings, search_term, max_results=1)
        if not hits:
            raise NotFoundError("Product", search_term.strip())
        resolved_product = hits[0].product_id
        product_name = hits[0].name
    else:
        raise ValidationError("Either product_id or search_term must be provided")

    query = queries.build_add_to_list_query(resolved_list, [resolved_product], [quantity])
    data = await client.execute(query)
    summary = normalizers.normalize_mutation_response(
        data, normalizers.ADD_FIELD, "add item to shopping list"
    )

    logger.info("Added product %s (x%d) to list %s", resolved_product, quantity, summary.id)
    return AddToListResult(
        product_id=resolved_product,
        product_name=product_name,
        quantity=quantity,
        list_id=summary.id,
        list_name=summary.name,
        message=f'Successfully added "{product_name}" (x{quantity}) to "{summary.name}"',
    )


async def remove_from_list(
    client,
    settings,
    item_ids: Optional[Sequence[str]] = None,
    product_name: Optional[str] = None,
    list_id: Optional[str] = None,
) -> RemoveFromListResult:
    """Remove list items by id, or every item whose name contains `product_name`."""
    resolved_list = resolve_list_id(list_id, settings.default_list_id)

    if item_ids:
        resolved_items = [validate_item_id(item_id) for item_id in item_ids]
    elif product_name and product_name.strip():
        detail = await get_list_items(client, settings, resolved_list)
        if not detail.items:
            raise NotFoundError("Items", "in shopping list")
        needle = product_name.strip().lower()
        resolved_items = [item.id for item in detail.items if needle in item.name.lower()]
        if not resolved_items:
            raise NotFoundError("Item", product_name.strip())
    else:
        raise ValidationError("Either item_ids or product_name must be provided")

    data = await client.execute(queries.build_remove_from_list_query(resolved_list, resolved_items))
    summary = normalizers.normalize_mutation_response(
        data, normalizers.REMOVE_FIELD, "remove items from shopping list"
    )

    count = len(resolved_items)
    logger.info("Removed %d item(s) from list %s", count, summary.id)
    return RemoveFromListResult(
        removed_count=count,
        list_id=summary.id,
        list_name=summary.name,
        message=f'Successfully removed {count} item(s) from "{summary.name}"',
    )


async def update_item_quantity(
    client,
    settings,
    item_id: str,
    quantity: int,
    list_id: Optional[str] = None,
) -> UpdateItemQuantityResult:
    resolved_item = validate_item_id(item_id)
    quantity = int(validate_positive(quantity, "Quantity"))
    resolved_list = resolve_list_id(list_id, settings.default_list_id)

    query = queries.build_update_item_quantity_query(resolved_list, resolved_item, quantity)
    data = await client.execute(query)
    summary = normalizers.normalize_mutation_response(
        data, normalizers.UPDATE_FIELD, "update item quantity"
    )

    return UpdateItemQuantityResult(
        item_id=resolved_item,
        quantity=quantity,
        list_id=summary.id,
        list_name=summary.name,
        message=f'Successfully updated item quantity to {quantity} in "{summary.name}"',
    )
