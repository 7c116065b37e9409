"""Redis implementation of CatalogLookup.

Each catalog item is stored as a JSON string under ``{prefix}:{id}``.
Lookups scan the prefix and apply the filter in process, which suits a
storefront catalog of a few hundred items.
"""

import json
import logging

import redis

from gemstone_gateway.config import get_redis_client, settings
from gemstone_gateway.entities import CandidateItem, CatalogFilter, CatalogItem
from gemstone_gateway.errors import CatalogLookupError

from .catalog_records import item_from_record, item_to_record

logger = logging.getLogger(__name__)


class RedisCatalogRepository:
    """Redis-backed catalog.

    This class satisfies the CatalogLookup protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis catalog repository.

        Args:
            redis_client: Redis client instance (decode_responses=True). If None, creates default.
            key_prefix: Prefix of catalog keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.catalog_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisCatalogRepository":
        """Factory method to create RedisCatalogRepository with defaults.

        Args:
            key_prefix: Catalog key prefix. If None, uses settings.

        Returns:
            Configured RedisCatalogRepository
        """
        return cls(key_prefix=key_prefix)

    def _key(self, item_id: str) -> str:
        return f"{self._prefix}:{item_id}"

    def _load_items(self) -> list[CatalogItem]:
        keys = list(self._client.scan_iter(match=f"{self._prefix}:*"))
        if not keys:
            return []

        items = []
        for raw in self._client.mget(keys):
            if raw is None:
                continue
            try:
                items.append(item_from_record(json.loads(raw)))
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed catalog record under prefix %s", self._prefix)
        return items

    def find_active_items(self, catalog_filter: CatalogFilter) -> list[CandidateItem]:
        """Return active items matching the filter, ranked and limited.

        Raises:
            CatalogLookupError: If Redis cannot be queried
        """
        try:
            items = self._load_items()
        except redis.RedisError as e:
            raise CatalogLookupError(f"Catalog query failed: {e}") from e
        return catalog_filter.apply(items)

    def add_items(self, items: list[CatalogItem]) -> int:
        """Store items, replacing any with the same id.

        Returns:
            Number of items written
        """
        pipe = self._client.pipeline()
        for item in items:
            pipe.set(self._key(item.id), json.dumps(item_to_record(item), ensure_ascii=False))
        pipe.execute()
        return len(items)

    def clear_all(self) -> int:
        """Delete every catalog key.

        Returns:
            Number of keys deleted
        """
        count = 0
        for key in self._client.scan_iter(match=f"{self._prefix}:*"):
            if self._client.delete(key):
                count += 1
        return count

    def count_all(self) -> int:
        count = 0
        for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible."""
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
