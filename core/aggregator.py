"""Keyword fan-out and result deduplication.

Responsibilities:
- Run the directory search for every keyword on a bounded thread pool
- Reduce the per-keyword results in keyword order
- Deduplicate products by structural equality, keeping first occurrences
- Enforce the configured aggregation policy

Policies:
- ``strict``  → the first keyword is searched on its own before anything
  else; if it finds nothing the run fails with ``NoResultsError``
- ``lenient`` → every keyword is searched; the run fails only when the
  combined set is empty and empty sets are not allowed
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from core.errors import NoResultsError, SearchError
from core.models import Product

if TYPE_CHECKING:
    from core.search import ProductHuntClient

logger = logging.getLogger(__name__)

STRICT = "strict"
LENIENT = "lenient"


# ── Deduplication ──────────────────────────────────────────────────────────────


def deduplicate(products: Iterable[Product]) -> list[Product]:
    """Remove structurally identical products, keeping the first occurrence.

    Two products are duplicates only when every field matches; the same
    post returned with a different vote count is kept twice.

    Examples:
        >>> deduplicate([p1, p2, p1]) == [p1, p2]
        True
    """
    seen: set[Product] = set()
    unique: list[Product] = []

    for product in products:
        if product not in seen:
            seen.add(product)
            unique.append(product)

    return unique


# ── Aggregation ────────────────────────────────────────────────────────────────


class Aggregator:
    """Searches every keyword and merges the results.

    Args:
        search_client: Anything with ``search(keyword) -> list[Product]``.
        policy: ``"strict"`` or ``"lenient"``.
        allow_empty: Under the lenient policy, return an empty list instead
            of raising when no keyword found anything.
        max_workers: Upper bound on concurrent searches.
    """

    def __init__(
        self,
        search_client: ProductHuntClient,
        policy: str = LENIENT,
        allow_empty: bool = False,
        max_workers: int = 4,
    ) -> None:
        if policy not in (STRICT, LENIENT):
            raise ValueError(f"Unknown aggregation policy {policy!r}")
        self.search_client = search_client
        self.policy = policy
        self.allow_empty = allow_empty
        self.max_workers = max(1, max_workers)

    def aggregate(self, keywords: list[str]) -> list[Product]:
        """Search *keywords* and return the deduplicated products.

        Raises:
            NoResultsError: When the policy requires products and none were found.
            AuthError: If the search client cannot obtain credentials.
        """
        if not keywords:
            raise NoResultsError("No keywords to search.")

        batches: list[list[Product]] = []
        remaining = list(keywords)

        if self.policy == STRICT:
            first = remaining.pop(0)
            first_batch = self._search_one(first)
            if not first_batch:
                raise NoResultsError(f'No products found for keyword "{first}".')
            batches.append(first_batch)

        batches.extend(self._search_all(remaining))

        products = deduplicate(p for batch in batches for p in batch)
        logger.info(
            "Aggregated %d unique products from %d keywords (policy=%s)",
            len(products), len(keywords), self.policy,
        )

        if not products and not self.allow_empty:
            raise NoResultsError("No related products were found.")
        return products

    def _search_all(self, keywords: list[str]) -> list[list[Product]]:
        """Search *keywords* concurrently; the result list follows keyword order."""
        if not keywords:
            return []
        workers = min(self.max_workers, len(keywords))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self._search_one, keywords))

    def _search_one(self, keyword: str) -> list[Product]:
        try:
            return self.search_client.search(keyword)
        except SearchError:
            logger.warning("Skipping keyword=%r after search error", keyword, exc_info=True)
            return []
