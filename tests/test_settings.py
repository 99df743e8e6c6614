"""Tests for config/settings.py — environment parsing and validation."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from config.settings import Settings
from core.errors import ConfigError

VALID_ENV = {
    "ANTHROPIC_API_KEY": "sk-test",
    "PRODUCTHUNT_AUTH": "static",
    "PRODUCTHUNT_API_KEY": "dev-token",
}


class TestDefaults:
    @patch.dict(os.environ, VALID_ENV, clear=True)
    def test_defaults(self):
        s = Settings()
        assert s.port == 3001
        assert s.cache_ttl_seconds == 3600.0
        assert s.max_search_results == 10
        assert s.max_keywords == 10
        assert s.aggregation_policy == "lenient"
        assert s.allow_empty_products is False
        assert s.request_timeout == 30.0
        assert s.search_order == "VOTES"

    @patch.dict(
        os.environ,
        {**VALID_ENV, "AGGREGATION_POLICY": " Strict ", "ALLOW_EMPTY_PRODUCTS": "true",
         "SEARCH_WORKERS": "5", "CACHE_TTL_SECONDS": "60"},
        clear=True,
    )
    def test_overrides(self):
        s = Settings()
        assert s.aggregation_policy == "strict"
        assert s.allow_empty_products is True
        assert s.search_workers == 5
        assert s.cache_ttl_seconds == 60.0


class TestValidate:
    @patch.dict(os.environ, VALID_ENV, clear=True)
    def test_valid_static(self):
        Settings().validate()

    @patch.dict(os.environ, {**VALID_ENV, "ANTHROPIC_API_KEY": ""}, clear=True)
    def test_missing_anthropic_key(self):
        with pytest.raises(ConfigError, match="ANTHROPIC_API_KEY"):
            Settings().validate()

    @patch.dict(os.environ, {**VALID_ENV, "PRODUCTHUNT_API_KEY": ""}, clear=True)
    def test_static_mode_needs_api_key(self):
        with pytest.raises(ConfigError, match="PRODUCTHUNT_API_KEY"):
            Settings().validate()

    @patch.dict(os.environ, {**VALID_ENV, "PRODUCTHUNT_AUTH": "oauth"}, clear=True)
    def test_oauth_mode_needs_client_credentials(self):
        with pytest.raises(ConfigError, match="PRODUCTHUNT_CLIENT_ID"):
            Settings().validate()

    @patch.dict(
        os.environ,
        {"ANTHROPIC_API_KEY": "sk", "PRODUCTHUNT_AUTH": "oauth",
         "PRODUCTHUNT_CLIENT_ID": "cid", "PRODUCTHUNT_CLIENT_SECRET": "secret"},
        clear=True,
    )
    def test_valid_oauth(self):
        Settings().validate()

    @patch.dict(os.environ, {**VALID_ENV, "PRODUCTHUNT_AUTH": "saml"}, clear=True)
    def test_unknown_auth_mode(self):
        with pytest.raises(ConfigError, match="PRODUCTHUNT_AUTH"):
            Settings().validate()

    @patch.dict(os.environ, {**VALID_ENV, "AGGREGATION_POLICY": "eager"}, clear=True)
    def test_unknown_policy(self):
        with pytest.raises(ConfigError, match="AGGREGATION_POLICY"):
            Settings().validate()
