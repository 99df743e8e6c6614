"""
Exception taxonomy for the research pipeline.

Every error carries a short, user-presentable message; provider details are
chained with ``raise ... from exc`` and only reach the logs.
"""

from __future__ import annotations


class ResearchError(Exception):
    """Base class for all pipeline errors."""


class ConfigError(ResearchError):
    """A required credential or setting is missing (fatal at start-up)."""


class GenerationError(ResearchError):
    """The keyword stage failed or produced no usable keyword."""


class AuthError(ResearchError):
    """An access token for the product directory could not be obtained."""


class SearchError(ResearchError):
    """A single keyword search failed (transport or malformed response)."""


class NoResultsError(ResearchError):
    """Aggregation produced no products where at least one is required."""


class SynthesisError(ResearchError):
    """The report stage failed or returned empty content."""
