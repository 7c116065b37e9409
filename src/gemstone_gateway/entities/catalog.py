"""Catalog domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRange:
    """Price band of a catalog item. Either bound may be unset."""

    min: float | None = None
    max: float | None = None
    currency: str = "INR"


@dataclass(frozen=True)
class CandidateItem:
    """Read-only projection of a catalog entry suggested to the user.

    Attributes:
        id: Catalog identifier
        display_name: Name shown to the user
        category: Gemstone category (e.g. "Ruby")
        price_range: Price band, or None when the item is unpriced
        slug: URL-friendly name used by the storefront to link the item
    """

    id: str
    display_name: str
    category: str
    price_range: PriceRange | None = None
    slug: str = ""


@dataclass(frozen=True)
class CatalogItem:
    """Full catalog record as held by a catalog repository."""

    id: str
    name: str
    category: str
    color: str = ""
    alt_name: str | None = None
    slug: str = ""
    price_range: PriceRange | None = None
    is_active: bool = True
    is_trending: bool = False
    created_at: float = 0.0

    def to_candidate(self) -> CandidateItem:
        """Project this record onto the fields the gateway exposes."""
        return CandidateItem(
            id=self.id,
            display_name=self.name,
            category=self.category,
            price_range=self.price_range,
            slug=self.slug,
        )


@dataclass(frozen=True)
class CatalogFilter:
    """Query sent to the catalog lookup collaborator.

    Attributes:
        category: Case-insensitive category term, or None for any category
        price_ceiling: Keep items whose minimum price is at most this value,
            plus every item without a minimum price
        color_term: Case-insensitive term OR-matched across name, alternate
            name, category and color
        limit: Maximum number of items to return
    """

    category: str | None = None
    price_ceiling: float | None = None
    color_term: str | None = None
    limit: int = 3

    def matches(self, item: CatalogItem) -> bool:
        """Check whether an item satisfies this filter."""
        if not item.is_active:
            return False

        if self.category and self.category.casefold() not in item.category.casefold():
            return False

        if self.price_ceiling is not None:
            price_min = item.price_range.min if item.price_range else None
            if price_min is not None and price_min > self.price_ceiling:
                return False

        if self.color_term:
            term = self.color_term.casefold()
            fields = (item.name, item.alt_name or "", item.category, item.color)
            if not any(term in field.casefold() for field in fields):
                return False

        return True

    def apply(self, items: list[CatalogItem]) -> list[CandidateItem]:
        """Filter, rank (trending first, then newest) and limit items."""
        matched = [item for item in items if self.matches(item)]
        matched.sort(key=lambda item: (item.is_trending, item.created_at), reverse=True)
        return [item.to_candidate() for item in matched[: self.limit]]
