"""Search-tag generation using the Claude API.

Turns a free-text topic (in any language) into a short ordered list of
English, lower-case Product Hunt topic tags with a single model call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.errors import GenerationError

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

#: System prompt for the tag-extraction call.
KEYWORD_SYSTEM = (
    "You are a product analyst who maps topics onto Product Hunt topic tags. "
    "Follow these rules:\n"
    "1. Translate the topic into English and derive tags from it.\n"
    "2. Work out what kind of product the topic describes and include tags for "
    "that category too (for example, a topic about acquiring customers should "
    "include 'lead' and 'lead-generation').\n"
    "3. Reply with the tags only, comma-separated, lower-case, no numbering."
)


def normalize_keyword(raw: str) -> str:
    """Trim and lower-case a single keyword."""
    return raw.strip().lower()


def parse_keywords(text: str, limit: int = 10) -> list[str]:
    """Split a comma-separated model reply into normalised keywords.

    Empty tokens are dropped and at most *limit* keywords are kept.

    Examples:
        >>> parse_keywords(" AI, Productivity ,, lead-generation ")
        ['ai', 'productivity', 'lead-generation']
    """
    keywords = [normalize_keyword(token) for token in text.split(",")]
    return [k for k in keywords if k][:limit]


class KeywordGenerator:
    """Derives Product Hunt search tags from a topic.

    The Anthropic client is lazy-initialised so that the class can be
    instantiated in tests without requiring a live API key.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: object = None  # Lazy-initialised anthropic.Anthropic

    @property
    def client(self) -> object:
        """Lazy-initialise and return the Anthropic SDK client."""
        if self._client is None:
            import anthropic
            # No SDK retries: a failed stage is terminal for the run.
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.settings.request_timeout,
                max_retries=0,
            )
        return self._client

    def generate(self, topic: str) -> list[str]:
        """Return up to ``max_keywords`` search tags for *topic*.

        Args:
            topic: Non-empty topic string.

        Returns:
            Ordered, lower-cased, trimmed keywords (never empty).

        Raises:
            GenerationError: If the model call fails or yields no keyword.
        """
        limit = self.settings.max_keywords
        user_content = (
            f'Generate {limit} Product Hunt topic tags for the topic "{topic}". '
            "Prefer single, highly relevant English words. Return the tags as a "
            "comma-separated list, for example: ai, productivity, lead, "
            "design-tools, ai-tools"
        )

        try:
            response = self.client.messages.create(
                model=self.settings.keyword_model,
                max_tokens=200,
                system=KEYWORD_SYSTEM,
                messages=[{"role": "user", "content": user_content}],
            )
        except Exception as exc:
            raise GenerationError("Keyword generation failed.") from exc

        text = "".join(
            getattr(block, "text", "") or ""
            for block in getattr(response, "content", None) or []
            if getattr(block, "type", None) == "text"
        )
        keywords = parse_keywords(text, limit=limit)
        if not keywords:
            raise GenerationError("Keyword generation returned no keywords.")

        logger.info("Generated %d keywords for topic=%r: %s", len(keywords), topic, keywords)
        return keywords
