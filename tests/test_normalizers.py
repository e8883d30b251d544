"""Tests for the HEB response normalizers."""

from __future__ import annotations

import copy

import pytest

from kitchen_mcp.core import normalizers
from kitchen_mcp.core.errors import HEBError, NotFoundError
from kitchen_mcp.core.models import Availability
from payloads import ITEM_ID_EGGS, LIST_ID, list_envelope, list_item, search_envelope, search_item


def test_search_scenario():
    products = normalizers.normalize_search_response(search_envelope(search_item()))

    assert [p.to_payload() for p in products] == [
        {
            "productId": "12345",
            "name": "HEB Organic Large Eggs",
            "price": 3.99,
            "size": "12 ct",
            "availability": "IN_STOCK",
        }
    ]


@pytest.mark.parametrize(
    ("state", "expected"),
    [
        ("IN_STOCK", Availability.IN_STOCK),
        ("LOW_STOCK", Availability.LOW_STOCK),
        ("OUT_OF_STOCK", Availability.OUT_OF_STOCK),
        ("DISCONTINUED", Availability.OUT_OF_STOCK),
        (None, Availability.OUT_OF_STOCK),
    ],
)
def test_availability_mapping(state, expected):
    assert normalizers.map_availability(state) is expected


def test_search_keeps_one_product_per_entry():
    items = [
        search_item("1", "A", "IN_STOCK"),
        search_item("2", "B", "LOW_STOCK"),
        search_item("3", "C", "SOMETHING_NEW"),
        {"id": "4", "fullDisplayName": "D"},
    ]
    products = normalizers.normalize_search_response(search_envelope(*items))

    assert len(products) == 4
    assert all(p.product_id and p.name for p in products)
    assert [p.availability for p in products] == [
        Availability.IN_STOCK,
        Availability.LOW_STOCK,
        Availability.OUT_OF_STOCK,
        Availability.OUT_OF_STOCK,
    ]


def test_price_uses_first_sku_online_context_only():
    item = search_item(SKUs=[
        {"contextPrices": [
            {"context": "CURBSIDE", "salePrice": {"amount": 1.00}},
            {"context": "ONLINE", "salePrice": {"amount": 2.50}},
        ]},
        {"contextPrices": [{"context": "ONLINE", "salePrice": {"amount": 9.99}}]},
    ])
    assert normalizers.normalize_product(item).price == 2.50

    no_online = search_item(SKUs=[
        {"contextPrices": [{"context": "CURBSIDE", "salePrice": {"amount": 1.00}}]},
        {"contextPrices": [{"context": "ONLINE", "salePrice": {"amount": 9.99}}]},
    ])
    assert normalizers.normalize_product(no_online).price is None


def test_brand_and_image_mapping():
    item = search_item(
        brand={"name": "H-E-B"},
        productImageUrls=[
            {"url": "https://img/small.jpg", "size": "SMALL"},
            {"url": "https://img/medium.jpg", "size": "MEDIUM"},
        ],
    )
    product = normalizers.normalize_product(item)
    assert product.brand == "H-E-B"
    assert product.image_url == "https://img/medium.jpg"


@pytest.mark.parametrize("position", [0, 1, 2])
def test_image_prefers_medium_wherever_it_is(position):
    images = [{"url": f"https://img/{size}.jpg", "size": size} for size in ("SMALL", "LARGE")]
    images.insert(position, {"url": "https://img/medium.jpg", "size": "MEDIUM"})
    assert normalizers.select_image_url(images) == "https://img/medium.jpg"


def test_image_falls_back_to_first_then_none():
    images = [{"url": "https://img/large.jpg", "size": "LARGE"}, {"url": "https://img/small.jpg", "size": "SMALL"}]
    assert normalizers.select_image_url(images) == "https://img/large.jpg"
    assert normalizers.select_image_url([]) is None
    assert normalizers.select_image_url(None) is None


def test_sparse_search_envelopes_do_not_raise():
    assert normalizers.normalize_search_response({}) == []
    assert normalizers.normalize_search_response({"productSearchItems": None}) == []
    assert normalizers.normalize_search_response({"productSearchItems": {"searchGrid": {}}}) == []

    bare = normalizers.normalize_product({"id": "9", "fullDisplayName": "Bare"})
    assert bare.to_payload() == {"productId": "9", "name": "Bare", "availability": "OUT_OF_STOCK"}


def test_list_summary_mapping():
    data = {
        "getShoppingListsV2": {
            "lists": [
                {
                    "id": "list-1",
                    "name": "My Groceries",
                    "totalItemCount": 15,
                    "created": "2024-01-01T00:00:00Z",
                    "updated": "2024-01-15T00:00:00Z",
                }
            ]
        }
    }
    [summary] = normalizers.normalize_shopping_lists_response(data)

    assert summary.to_payload() == {
        "id": "list-1",
        "name": "My Groceries",
        "itemCount": 15,
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-15T00:00:00Z",
    }


def test_missing_lists_array_is_empty():
    assert normalizers.normalize_shopping_lists_response({"getShoppingListsV2": {}}) == []


def test_list_detail_mapping():
    data = list_envelope(
        list_item(
            ITEM_ID_EGGS,
            "HEB Organic Large Eggs",
            quantity=2,
            checked=True,
            productImageUrls=[{"url": "https://img/first.jpg", "size": "SMALL"}],
        )
    )
    detail = normalizers.normalize_shopping_list_response(data, LIST_ID)

    assert detail.id == LIST_ID
    assert detail.item_count == 1
    assert detail.created_at == "2024-01-01T00:00:00Z"
    [item] = detail.items
    assert item.to_payload() == {
        "id": ITEM_ID_EGGS,
        "productId": "12345",
        "name": "HEB Organic Large Eggs",
        "quantity": 2,
        "checked": True,
        "price": 3.99,
        "imageUrl": "https://img/first.jpg",
    }


def test_list_detail_tolerates_missing_item_page():
    detail = normalizers.normalize_shopping_list_response({"getShoppingListV2": {"id": LIST_ID, "name": "Empty"}})
    assert detail.items == []
    assert detail.item_count == 0


def test_missing_list_is_not_found():
    with pytest.raises(NotFoundError, match=LIST_ID):
        normalizers.normalize_shopping_list_response({"getShoppingListV2": None}, LIST_ID)


def test_mutation_fields_differ_from_operation_names():
    data = {"addShoppingListItemsV2": {"id": LIST_ID, "name": "My Groceries", "totalItemCount": 4}}
    summary = normalizers.normalize_mutation_response(data, normalizers.ADD_FIELD, "add item")
    assert (summary.id, summary.name, summary.item_count) == (LIST_ID, "My Groceries", 4)

    with pytest.raises(HEBError, match="Failed to add item"):
        normalizers.normalize_mutation_response({"addToShoppingListV2": data["addShoppingListItemsV2"]},
                                                normalizers.ADD_FIELD, "add item")


def test_normalizing_twice_is_identical_and_leaves_input_untouched():
    envelope = search_envelope(
        search_item("1", "A", productImageUrls=[{"url": "https://img/a.jpg", "size": "MEDIUM"}]),
        search_item("2", "B", "LOW_STOCK"),
    )
    snapshot = copy.deepcopy(envelope)

    first = [p.to_payload() for p in normalizers.normalize_search_response(envelope)]
    second = [p.to_payload() for p in normalizers.normalize_search_response(envelope)]

    assert first == second
    assert envelope == snapshot
