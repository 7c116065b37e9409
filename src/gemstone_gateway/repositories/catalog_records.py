"""Conversion between stored catalog records and CatalogItem entities.

Records use the storefront's document shape::

    {
        "id": "royal-ruby",
        "name": {"english": "Royal Ruby", "urdu": "Yaqoot Sultani"},
        "slug": "royal-ruby",
        "category": "Ruby",
        "color": "Deep Crimson Red",
        "priceRange": {"min": 45000, "max": 90000, "currency": "INR"},
        "isActive": true,
        "isTrending": true,
        "createdAt": "2024-03-01T10:00:00Z"
    }
"""

import re
from datetime import datetime
from typing import Any

from gemstone_gateway.entities import CatalogItem, PriceRange


def slugify(name: str) -> str:
    """Build a URL-friendly slug from an item name."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")


def _parse_timestamp(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).timestamp()


def _parse_price_range(value: Any) -> PriceRange | None:
    if not value:
        return None
    price_min = value.get("min")
    price_max = value.get("max")
    return PriceRange(
        min=float(price_min) if price_min is not None else None,
        max=float(price_max) if price_max is not None else None,
        currency=value.get("currency", "INR"),
    )


def item_from_record(record: dict[str, Any]) -> CatalogItem:
    """Build a CatalogItem from a stored record.

    Args:
        record: Decoded JSON document

    Returns:
        The catalog item

    Raises:
        KeyError: If the record has no name or category
    """
    name = record["name"]
    if isinstance(name, dict):
        display_name = name["english"]
        alt_name = name.get("urdu")
    else:
        display_name = str(name)
        alt_name = None

    slug = record.get("slug") or slugify(display_name)
    return CatalogItem(
        id=str(record.get("id") or slug),
        name=display_name,
        alt_name=alt_name,
        slug=slug,
        category=record["category"],
        color=record.get("color", ""),
        price_range=_parse_price_range(record.get("priceRange")),
        is_active=bool(record.get("isActive", True)),
        is_trending=bool(record.get("isTrending", False)),
        created_at=_parse_timestamp(record.get("createdAt")),
    )


def item_to_record(item: CatalogItem) -> dict[str, Any]:
    """Convert a CatalogItem to its stored record."""
    record: dict[str, Any] = {
        "id": item.id,
        "name": {"english": item.name, "urdu": item.alt_name},
        "slug": item.slug,
        "category": item.category,
        "color": item.color,
        "isActive": item.is_active,
        "isTrending": item.is_trending,
        "createdAt": item.created_at,
    }
    if item.price_range is not None:
        record["priceRange"] = {
            "min": item.price_range.min,
            "max": item.price_range.max,
            "currency": item.price_range.currency,
        }
    return record
