"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ConfigError if a required credential is missing
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from core.errors import ConfigError

#: Supported Product Hunt credential strategies.
AUTH_MODES: tuple[str, ...] = ("static", "oauth")
#: Supported aggregation policies (see ``core.aggregator``).
AGGREGATION_POLICIES: tuple[str, ...] = ("strict", "lenient")


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )

    # ── Product Hunt ────────────────────────────────────────────────────────
    #: ``static`` uses a developer token; ``oauth`` runs a client-credentials exchange.
    producthunt_auth: str = field(
        default_factory=lambda: os.environ.get("PRODUCTHUNT_AUTH", "static").strip().lower()
    )
    producthunt_api_key: str = field(
        default_factory=lambda: os.environ.get("PRODUCTHUNT_API_KEY", "")
    )
    producthunt_client_id: str = field(
        default_factory=lambda: os.environ.get("PRODUCTHUNT_CLIENT_ID", "")
    )
    producthunt_client_secret: str = field(
        default_factory=lambda: os.environ.get("PRODUCTHUNT_CLIENT_SECRET", "")
    )
    producthunt_api_url: str = field(
        default_factory=lambda: os.environ.get(
            "PRODUCTHUNT_API_URL", "https://api.producthunt.com/v2/api/graphql"
        )
    )
    producthunt_token_url: str = field(
        default_factory=lambda: os.environ.get(
            "PRODUCTHUNT_TOKEN_URL", "https://api.producthunt.com/v2/oauth/token"
        )
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(default_factory=lambda: _env_flag("FLASK_DEBUG"))
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "3001"))
    )

    # ── Search ──────────────────────────────────────────────────────────────
    max_search_results: int = field(
        default_factory=lambda: int(os.environ.get("MAX_SEARCH_RESULTS", "10"))
    )
    #: Product Hunt ``PostsOrder`` value: VOTES | RANKING | NEWEST | FEATURED_AT.
    search_order: str = field(
        default_factory=lambda: os.environ.get("SEARCH_ORDER", "VOTES").strip().upper()
    )
    max_keywords: int = field(
        default_factory=lambda: int(os.environ.get("MAX_KEYWORDS", "10"))
    )
    search_workers: int = field(
        default_factory=lambda: int(os.environ.get("SEARCH_WORKERS", "4"))
    )
    cache_ttl_seconds: float = field(
        default_factory=lambda: float(os.environ.get("CACHE_TTL_SECONDS", "3600"))
    )
    aggregation_policy: str = field(
        default_factory=lambda: os.environ.get("AGGREGATION_POLICY", "lenient").strip().lower()
    )
    allow_empty_products: bool = field(
        default_factory=lambda: _env_flag("ALLOW_EMPTY_PRODUCTS")
    )

    #: Per-call timeout (seconds) for every outbound request.
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30"))
    )

    # ── AI Models ───────────────────────────────────────────────────────────
    #: Fast model used to turn a topic into search tags.
    keyword_model: str = field(
        default_factory=lambda: os.environ.get("KEYWORD_MODEL", "claude-haiku-4-5")
    )
    #: Model used for the long-form analysis report.
    report_model: str = field(
        default_factory=lambda: os.environ.get("REPORT_MODEL", "claude-haiku-4-5")
    )
    report_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("REPORT_MAX_TOKENS", "2000"))
    )

    def validate(self) -> None:
        """Raise ``ConfigError`` if any required setting is missing or invalid."""
        missing: list[str] = []
        if not self.anthropic_api_key:
            missing.append("ANTHROPIC_API_KEY")

        if self.producthunt_auth not in AUTH_MODES:
            raise ConfigError(
                f"PRODUCTHUNT_AUTH must be one of {', '.join(AUTH_MODES)}, "
                f"got {self.producthunt_auth!r}."
            )
        if self.producthunt_auth == "static" and not self.producthunt_api_key:
            missing.append("PRODUCTHUNT_API_KEY")
        if self.producthunt_auth == "oauth":
            if not self.producthunt_client_id:
                missing.append("PRODUCTHUNT_CLIENT_ID")
            if not self.producthunt_client_secret:
                missing.append("PRODUCTHUNT_CLIENT_SECRET")

        if missing:
            raise ConfigError(
                f"Missing required environment variable(s): {', '.join(missing)}. "
                "Copy .env.example to .env and fill in your keys."
            )

        if self.aggregation_policy not in AGGREGATION_POLICIES:
            raise ConfigError(
                f"AGGREGATION_POLICY must be one of {', '.join(AGGREGATION_POLICIES)}, "
                f"got {self.aggregation_policy!r}."
            )
        if self.search_workers < 1:
            raise ConfigError("SEARCH_WORKERS must be at least 1.")
