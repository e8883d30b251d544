"""Input validators. Pure functions, run before any network call."""

from __future__ import annotations

import re
from typing import Optional, Union

from .errors import ValidationError

_PRODUCT_ID_RE = re.compile(r"^\d+$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

Number = Union[int, float]


def validate_non_empty(value: Optional[str], field_name: str) -> str:
    """Return the trimmed value, or raise if nothing is left."""
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty")
    return value.strip()


def validate_positive(value: Number, field_name: str) -> Number:
    if value <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return value


def validate_product_id(product_id: str) -> str:
    """HEB product IDs are numeric strings."""
    trimmed = product_id.strip()
    if not _PRODUCT_ID_RE.match(trimmed):
        raise ValidationError("Product ID must be a numeric string")
    return trimmed


def _validate_uuid(value: str, label: str) -> str:
    trimmed = value.strip()
    if not _UUID_RE.match(trimmed):
        raise ValidationError(f"{label} must be a valid UUID")
    return trimmed


def validate_list_id(list_id: str) -> str:
    return _validate_uuid(list_id, "List ID")


def validate_item_id(item_id: str) -> str:
    return _validate_uuid(item_id, "Item ID")
