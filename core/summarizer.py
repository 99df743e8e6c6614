"""AI report synthesis using the Claude API.

Sends the aggregated Product Hunt products together with the research topic
to Claude and returns a prose analysis with three parts:

1. **Market overview** — what the leading products offer and which feature
   directions dominate.
2. **Market needs** — what users likely want, including unmet needs and
   pain points.
3. **Competitive opportunities** — how a newcomer could differentiate.

The Anthropic client is lazy-initialised so that the class can be
instantiated in tests without requiring a live API key.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from core.errors import SynthesisError

if TYPE_CHECKING:
    from config.settings import Settings
    from core.models import Product

logger = logging.getLogger(__name__)

#: System prompt for the report call.
REPORT_SYSTEM = (
    "You are a product analyst. Analyse the Product Hunt product data you are "
    "given and write an analysis report based on it, focusing on:\n"
    "1. Market overview: the core capabilities the main products on the market "
    "offer and the main feature directions.\n"
    "2. Market needs: the features and qualities users are likely to want, "
    "including unmet needs and pain points.\n"
    "3. Competitive opportunities: how to build an advantage through "
    "differentiated positioning or feature innovation, including possible "
    "improvements and openings for innovation.\n\n"
    "Write the report directly without repeating the product data. Use clear "
    "headings and paragraphs. Answer in the language the topic is written in."
)


class ReportSynthesizer:
    """Generates the market analysis report for a product set."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: object = None  # Lazy-initialised anthropic.Anthropic

    @property
    def client(self) -> object:
        """Lazy-initialise and return the Anthropic SDK client."""
        if self._client is None:
            import anthropic
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.settings.request_timeout,
                max_retries=0,
            )
        return self._client

    def synthesize(self, products: list[Product], topic: str) -> str:
        """Return the analysis report for *products* researched under *topic*.

        Args:
            products: Deduplicated products (may be empty when empty sets are
                allowed; the model is then told there is no product data).
            topic: The original research topic.

        Returns:
            The raw report text.

        Raises:
            SynthesisError: If the model call fails or returns no text.
        """
        product_data = json.dumps(
            [p.to_wire() for p in products], ensure_ascii=False, indent=2
        )
        user_content = (
            f'Analyse the following products related to "{topic}" and write the '
            "report with the structure described above.\n"
            f"Product data:\n{product_data if products else '(no products found)'}"
        )

        try:
            response = self.client.messages.create(
                model=self.settings.report_model,
                max_tokens=self.settings.report_max_tokens,
                system=REPORT_SYSTEM,
                messages=[{"role": "user", "content": user_content}],
            )
        except Exception as exc:
            raise SynthesisError("Product analysis failed.") from exc

        text = "".join(
            getattr(block, "text", "") or ""
            for block in getattr(response, "content", None) or []
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise SynthesisError("Product analysis returned an empty report.")

        logger.info("Synthesised %d-character report for topic=%r", len(text), topic)
        return text
