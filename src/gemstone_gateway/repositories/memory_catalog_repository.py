"""In-memory catalog repository.

This is the default catalog backend: items are held in process and can be
loaded from a JSON seed file. No external services required.
"""

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from gemstone_gateway.config import settings
from gemstone_gateway.entities import CandidateItem, CatalogFilter, CatalogItem

from .catalog_records import item_from_record

logger = logging.getLogger(__name__)


class InMemoryCatalogRepository:
    """In-memory implementation of the CatalogLookup protocol.

    This class satisfies the CatalogLookup protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        """Initialize the repository.

        Args:
            items: Initial catalog items.
        """
        self._items: dict[str, CatalogItem] = {item.id: item for item in items}
        self._lock = threading.Lock()

    @classmethod
    def create(cls, seed_path: str | None = None) -> "InMemoryCatalogRepository":
        """Factory method to create a repository loaded from the seed file.

        A missing seed file yields an empty catalog.

        Args:
            seed_path: Path to a JSON list of catalog records. If None, uses settings.

        Returns:
            Configured InMemoryCatalogRepository
        """
        path = Path(seed_path or settings.catalog_seed_path)
        if not path.exists():
            logger.warning("Catalog seed %s not found, starting with an empty catalog", path)
            return cls()
        return cls(load_seed_items(path))

    def add_items(self, items: Iterable[CatalogItem]) -> int:
        """Add or replace items.

        Returns:
            Number of items written
        """
        count = 0
        with self._lock:
            for item in items:
                self._items[item.id] = item
                count += 1
        return count

    def find_active_items(self, catalog_filter: CatalogFilter) -> list[CandidateItem]:
        """Return active items matching the filter, ranked and limited."""
        with self._lock:
            items = list(self._items.values())
        return catalog_filter.apply(items)

    def count_all(self) -> int:
        with self._lock:
            return len(self._items)

    def health_check(self) -> bool:
        return True


def load_seed_items(path: str | Path) -> list[CatalogItem]:
    """Load catalog items from a JSON seed file.

    Args:
        path: File holding a JSON list of catalog records

    Returns:
        Parsed catalog items
    """
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    items = [item_from_record(record) for record in records]
    logger.info("Loaded %d catalog items from %s", len(items), path)
    return items
