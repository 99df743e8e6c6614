"""
Research pipeline for Product Radar.

Flow
────
1. KeywordGenerator.generate(topic)
     → Claude turns the topic into up to ten Product Hunt topic tags
2. Aggregator.aggregate(keywords)
     → Product Hunt is searched for every tag (cached, bounded fan-out)
       and the results are deduplicated
3. ReportSynthesizer.synthesize(products, topic)
     → Claude writes the market analysis report
4. ResearchResult(content, keywords, products)

Any stage failure stops the run. The failing stage and the full traceback
are logged here; callers only see the typed error and its short message.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.aggregator import Aggregator
from core.auth import provider_from_settings
from core.cache import TTLCache
from core.errors import GenerationError, NoResultsError, ResearchError, SynthesisError
from core.keywords import KeywordGenerator
from core.models import ResearchResult
from core.search import ProductHuntClient
from core.summarizer import ReportSynthesizer

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


class ResearchPipeline:
    """Sequences keyword generation, aggregation and report synthesis."""

    def __init__(
        self,
        keyword_generator: KeywordGenerator,
        aggregator: Aggregator,
        synthesizer: ReportSynthesizer,
    ) -> None:
        self.keyword_generator = keyword_generator
        self.aggregator = aggregator
        self.synthesizer = synthesizer

    def run(self, topic: str) -> ResearchResult:
        """Research *topic* end to end.

        Raises:
            ValueError: If topic is blank.
            GenerationError: If no keywords could be generated.
            AuthError: If Product Hunt credentials could not be obtained.
            NoResultsError: If the aggregation policy found no products.
            SynthesisError: If the report could not be written.
        """
        topic = topic.strip()
        if not topic:
            raise ValueError("Topic must not be empty.")

        logger.info("Starting research for topic=%r", topic)
        stage = "keywords"
        try:
            keywords = self.keyword_generator.generate(topic)
            if not keywords:
                raise GenerationError("Keyword generation returned no keywords.")

            stage = "search"
            products = self.aggregator.aggregate(keywords)

            stage = "synthesis"
            content = self.synthesizer.synthesize(products, topic)
            if not content:
                raise SynthesisError("Product analysis returned an empty report.")
        except NoResultsError:
            logger.warning("No products found for topic=%r", topic)
            raise
        except ResearchError:
            logger.exception("Research failed at stage=%s for topic=%r", stage, topic)
            raise

        logger.info(
            "Research complete for topic=%r: %d keywords, %d products",
            topic, len(keywords), len(products),
        )
        return ResearchResult(
            content=content,
            keywords=tuple(keywords),
            products=tuple(products),
        )


def build_pipeline(settings: Settings, cache: TTLCache | None = None) -> ResearchPipeline:
    """Wire a ``ResearchPipeline`` from configuration.

    Args:
        settings: Validated application settings.
        cache: Result cache to share; a new process-wide one is created if omitted.
    """
    search_client = ProductHuntClient(
        credentials=provider_from_settings(settings),
        cache=cache if cache is not None else TTLCache(ttl=settings.cache_ttl_seconds),
        api_url=settings.producthunt_api_url,
        max_results=settings.max_search_results,
        order=settings.search_order or None,
        timeout=settings.request_timeout,
    )
    aggregator = Aggregator(
        search_client,
        policy=settings.aggregation_policy,
        allow_empty=settings.allow_empty_products,
        max_workers=settings.search_workers,
    )
    return ResearchPipeline(
        keyword_generator=KeywordGenerator(settings),
        aggregator=aggregator,
        synthesizer=ReportSynthesizer(settings),
    )
