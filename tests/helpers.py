"""Test helpers: sample products, fake settings and fake Claude responses."""

from __future__ import annotations

from unittest.mock import MagicMock

from core.models import Product


def make_product(name: str, **overrides) -> Product:
    data = {
        "name": name,
        "tagline": f"{name} tagline",
        "description": f"{name} does useful things.",
        "url": f"https://www.producthunt.com/posts/{name.lower()}",
        "website": f"https://{name.lower()}.example.com",
        "votes_count": 100,
        "created_at": "2024-05-01T08:00:00Z",
        "topics": ("Artificial Intelligence", "Productivity"),
    }
    data.update(overrides)
    return Product(**data)


def make_settings(**overrides):
    """Return a minimal Settings-like object for testing."""
    settings = MagicMock()
    settings.anthropic_api_key = "test-key"
    settings.keyword_model = "claude-haiku-4-5"
    settings.report_model = "claude-haiku-4-5"
    settings.report_max_tokens = 2000
    settings.max_keywords = 10
    settings.request_timeout = 30.0
    for k, v in overrides.items():
        setattr(settings, k, v)
    return settings


def claude_response(text: str) -> MagicMock:
    """Build a fake ``messages.create`` response holding one text block."""
    block = MagicMock()
    block.type = "text"
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response
