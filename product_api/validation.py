"""Field validation for product write payloads.

``validate_product`` never short-circuits: every rule runs and every broken
rule contributes one message, so clients can fix a payload in one round trip.
"""
import math
from typing import Any, Dict, List

from .models import ALLOWED_CATEGORIES

NAME_REQUIRED = "Name is required and must be a non-empty string."
PRICE_REQUIRED = "Price is required and must be a positive number."
CATEGORY_REQUIRED = "Category is required and must be a non-empty string."
DESCRIPTION_NOT_STRING = "Description must be a string if provided."
CATEGORY_NOT_ALLOWED = (
    f"Category must be one of the following: {', '.join(ALLOWED_CATEGORIES)}."
)
IN_STOCK_NOT_BOOLEAN = "inStock must be a boolean if provided."


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass but never a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def validate_product(payload: Dict[str, Any]) -> List[str]:
    errors: List[str] = []

    if _is_blank(payload.get("name")):
        errors.append(NAME_REQUIRED)

    if not _is_positive_number(payload.get("price")):
        errors.append(PRICE_REQUIRED)

    category = payload.get("category")
    if _is_blank(category):
        errors.append(CATEGORY_REQUIRED)

    description = payload.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(DESCRIPTION_NOT_STRING)

    if not _is_blank(category) and category.strip().lower() not in ALLOWED_CATEGORIES:
        errors.append(CATEGORY_NOT_ALLOWED)

    in_stock = payload.get("inStock")
    if in_stock is not None and not isinstance(in_stock, bool):
        errors.append(IN_STOCK_NOT_BOOLEAN)

    return errors


def normalize_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Trim and lowercase in place; only call on a payload that validated."""
    payload["name"] = payload["name"].strip()
    payload["category"] = payload["category"].strip().lower()
    if isinstance(payload.get("description"), str):
        payload["description"] = payload["description"].strip()
    # an explicit null means "not provided"
    for key in ("description", "inStock"):
        if key in payload and payload[key] is None:
            del payload[key]
    return payload
