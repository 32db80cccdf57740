"""
Normalization of backend response shapes.

The backend is not consistent about list responses: some endpoints return
a bare JSON array, others wrap it in an envelope such as
``{"products": [...]}``. Everything here accepts either form, plus None
for a failed read, and always hands back a plain list.
"""

from typing import Any


def extract_list(payload: Any, key: str) -> list[Any]:
    """Return the list inside ``payload``.

    Args:
        payload: Decoded JSON body, or None.
        key: Envelope key to look under (e.g. "products").

    Returns:
        The list of records, or an empty list if none could be found.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        items = payload.get(key)
        if isinstance(items, list):
            return items
    return []


def extract_record(payload: Any, key: str) -> dict[str, Any] | None:
    """Return a single record, unwrapping ``{"product": {...}}`` if present."""
    if not isinstance(payload, dict):
        return None
    inner = payload.get(key)
    if isinstance(inner, dict):
        return inner
    return payload


def record_id(record: dict[str, Any]) -> str | None:
    """Return a record's id, preferring the ``_id`` field."""
    value = record.get("_id") or record.get("id")
    return str(value) if value is not None else None


def group_products_by_brand(
    brands: list[dict[str, Any]],
    products: list[dict[str, Any]],
) -> dict[str, list[dict[str, Any]]]:
    """Group products under each brand.

    Each brand's products are stored under both the brand id and the brand
    name, since product records reference brands by name.
    """
    grouped: dict[str, list[dict[str, Any]]] = {}
    for brand in brands:
        name = brand.get("name")
        matching = [p for p in products if p.get("brand") == name]

        brand_id = record_id(brand)
        if brand_id is not None:
            grouped[brand_id] = matching
        if name is not None:
            grouped[str(name)] = matching
    return grouped
