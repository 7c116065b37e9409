"""Catalog lookup protocol.

Defines the interface for the product catalog the gateway queries.

Implementations can include:
- In-memory catalog loaded from a JSON seed (default)
- Redis-backed catalog
- Any document or relational store
"""

from typing import Protocol, runtime_checkable

from gemstone_gateway.entities import CandidateItem, CatalogFilter


@runtime_checkable
class CatalogLookup(Protocol):
    """Protocol for catalog lookup backends."""

    def find_active_items(self, catalog_filter: CatalogFilter) -> list[CandidateItem]:
        """Return active items matching the filter, ranked and limited.

        Ranking is trending first, then most recently created.

        Args:
            catalog_filter: Category, price ceiling, color term and limit

        Returns:
            Up to ``catalog_filter.limit`` candidate items

        Raises:
            CatalogLookupError: If the backend cannot be queried
        """
        ...

    def health_check(self) -> bool:
        """Check if the catalog is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
