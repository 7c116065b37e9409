"""Catalog matching for extracted parameters."""

import asyncio
import logging

from gemstone_gateway.config import settings
from gemstone_gateway.entities import CandidateItem, CatalogFilter, ExtractedParameters
from gemstone_gateway.protocols import CatalogLookup

logger = logging.getLogger(__name__)


class CatalogMatcher:
    """Turns extracted parameters into a catalog query.

    Lookup failures and timeouts are logged and degrade to zero
    candidates; nothing raised by the catalog reaches the caller.
    """

    def __init__(
        self,
        catalog: CatalogLookup,
        timeout: float | None = None,
        max_candidates: int | None = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            catalog: Catalog lookup backend (required).
            timeout: Seconds to wait for the catalog. Defaults to settings.
            max_candidates: Maximum candidates returned. Defaults to settings.
        """
        self._catalog = catalog
        self._timeout = timeout or settings.catalog_timeout_seconds
        self._max_candidates = max_candidates or settings.catalog_max_candidates

    def build_filter(self, params: ExtractedParameters) -> CatalogFilter:
        """Build the catalog filter for extracted parameters.

        A budget of zero or less does not constrain price.
        """
        price_ceiling = params.budget if params.budget is not None and params.budget > 0 else None
        return CatalogFilter(
            category=params.category,
            price_ceiling=price_ceiling,
            color_term=params.color,
            limit=self._max_candidates,
        )

    async def find_candidates(self, params: ExtractedParameters) -> list[CandidateItem]:
        """Return up to ``max_candidates`` ranked catalog matches.

        Args:
            params: Extracted parameters

        Returns:
            Candidate items; empty when the query is under-specified or
            the lookup fails
        """
        if not params.can_match_catalog:
            return []

        catalog_filter = self.build_filter(params)
        try:
            items = await asyncio.wait_for(
                asyncio.to_thread(self._catalog.find_active_items, catalog_filter),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Catalog lookup timed out after %.1fs", self._timeout)
            return []
        except Exception:
            logger.warning("Catalog lookup failed, continuing without candidates", exc_info=True)
            return []

        return list(items)[: self._max_candidates]

    @property
    def catalog(self) -> CatalogLookup:
        """Get the underlying catalog (for testing)."""
        return self._catalog
