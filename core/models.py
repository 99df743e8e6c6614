"""
Pydantic models shared across the Product Radar core.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A normalized Product Hunt post.

    Frozen so that two records compare (and hash) by their full content;
    that structural equality is what deduplication relies on.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    tagline: str
    description: str = ""
    url: str
    website: Optional[str] = None
    votes_count: int = Field(default=0, ge=0, alias="votesCount")
    created_at: datetime = Field(alias="createdAt")
    topics: tuple[str, ...] = ()

    def to_wire(self) -> dict:
        """Serialise with the camelCase field names the frontend expects."""
        return self.model_dump(mode="json", by_alias=True)


class ResearchResult(BaseModel):
    """Outcome of one pipeline run: report text, keywords and products."""

    model_config = ConfigDict(frozen=True)

    content: str
    keywords: tuple[str, ...]
    products: tuple[Product, ...]

    def to_wire(self) -> dict:
        return {
            "content": self.content,
            "keywords": list(self.keywords),
            "products": [p.to_wire() for p in self.products],
        }
