"""Product Hunt directory search.

Responsibilities:
- Obtain a bearer token from the configured credential provider
- Serve fresh results from the injected cache
- Query the Product Hunt GraphQL API for the posts filed under a topic tag
- Normalise each post into a ``Product``

Transport and response-shape failures never escape ``search``: they are
logged and turned into an empty result for that keyword. Only credential
failures (``AuthError``) propagate.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import requests
from pydantic import ValidationError

from core.cache import Cache
from core.errors import SearchError
from core.keywords import normalize_keyword
from core.models import Product

if TYPE_CHECKING:
    from core.auth import CredentialProvider

logger = logging.getLogger(__name__)

# ── GraphQL query ──────────────────────────────────────────────────────────────

#: Posts filed under a topic slug, with the fields the report needs.
POSTS_QUERY = """
query($topic: String!, $first: Int!, $order: PostsOrder) {
  posts(first: $first, topic: $topic, order: $order) {
    edges {
      node {
        name
        tagline
        description
        url
        website
        votesCount
        createdAt
        topics {
          edges {
            node {
              name
            }
          }
        }
      }
    }
  }
}
"""


# ── Normalisation ──────────────────────────────────────────────────────────────


def normalize_post(node: dict[str, Any]) -> Product:
    """Convert a raw GraphQL ``Post`` node into a ``Product``.

    Missing descriptions become ``""`` and missing topic connections an
    empty tuple.

    Raises:
        pydantic.ValidationError: If a required field is absent or invalid.
    """
    topic_edges = (node.get("topics") or {}).get("edges") or []
    topics = tuple(
        edge["node"]["name"]
        for edge in topic_edges
        if edge and edge.get("node") and edge["node"].get("name")
    )
    return Product(
        name=node.get("name"),
        tagline=node.get("tagline") or "",
        description=node.get("description") or "",
        url=node.get("url"),
        website=node.get("website") or None,
        votes_count=node.get("votesCount") or 0,
        created_at=node.get("createdAt"),
        topics=topics,
    )


# ── Client ─────────────────────────────────────────────────────────────────────


class ProductHuntClient:
    """Searches the Product Hunt directory one keyword at a time.

    Args:
        credentials: Provider of the bearer token (static key or OAuth).
        cache: Keyword → product tuple store; fresh hits skip the network.
        api_url: GraphQL endpoint.
        max_results: Posts requested per keyword.
        order: Product Hunt ``PostsOrder`` value used to rank posts.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        cache: Cache[tuple[Product, ...]],
        api_url: str = "https://api.producthunt.com/v2/api/graphql",
        max_results: int = 10,
        order: Optional[str] = "VOTES",
        timeout: float = 30.0,
    ) -> None:
        self.credentials = credentials
        self.cache = cache
        self.api_url = api_url
        self.max_results = max_results
        self.order = order
        self.timeout = timeout

    def search(self, keyword: str) -> list[Product]:
        """Return up to ``max_results`` products for *keyword* (possibly none).

        Raises:
            AuthError: If no access token can be obtained.
        """
        token = self.credentials.get_token()

        key = normalize_keyword(keyword)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for keyword=%r (%d products)", key, len(cached))
            return list(cached)

        try:
            products = self._fetch(key, token)
        except SearchError:
            logger.warning("Search failed for keyword=%r", key, exc_info=True)
            return []

        self.cache.put(key, tuple(products))
        logger.info("Search keyword=%r returned %d products", key, len(products))
        return products

    def _fetch(self, keyword: str, token: str) -> list[Product]:
        """Run the GraphQL query and normalise the response.

        Raises:
            SearchError: On transport failure, a non-200 status, GraphQL
                errors, or a response that does not have the expected shape.
        """
        variables: dict[str, Any] = {"topic": keyword, "first": self.max_results}
        if self.order:
            variables["order"] = self.order

        try:
            response = requests.post(
                self.api_url,
                json={"query": POSTS_QUERY, "variables": variables},
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SearchError(f"Request for {keyword!r} failed: {exc}") from exc

        if response.status_code != 200:
            raise SearchError(
                f"Product Hunt returned {response.status_code} for {keyword!r}: "
                f"{response.text[:500]}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchError(f"Response for {keyword!r} was not JSON") from exc

        if not isinstance(payload, dict):
            raise SearchError(f"Unexpected response type for {keyword!r}")
        if payload.get("errors"):
            raise SearchError(f"GraphQL errors for {keyword!r}: {payload['errors']}")

        try:
            edges = payload["data"]["posts"]["edges"]
        except (KeyError, TypeError) as exc:
            raise SearchError(f"Response for {keyword!r} has no posts.edges") from exc
        if not isinstance(edges, list):
            raise SearchError(f"posts.edges for {keyword!r} is not a list")

        try:
            return [normalize_post(edge["node"]) for edge in edges]
        except (KeyError, TypeError, AttributeError, ValidationError) as exc:
            raise SearchError(f"Malformed post in response for {keyword!r}") from exc
