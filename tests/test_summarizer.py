"""Tests for core/summarizer.py — report synthesis."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from core.errors import SynthesisError
from core.summarizer import REPORT_SYSTEM, ReportSynthesizer
from tests.helpers import claude_response, make_settings


def make_synthesizer(response=None, error=None) -> ReportSynthesizer:
    synth = ReportSynthesizer(make_settings())
    synth._client = MagicMock()
    if error is not None:
        synth._client.messages.create.side_effect = error
    else:
        synth._client.messages.create.return_value = response
    return synth


class TestReportSynthesizer:
    def test_returns_report_text(self, products):
        synth = make_synthesizer(claude_response("## Market overview\nBusy market."))
        assert synth.synthesize(products, "AI notes") == "## Market overview\nBusy market."

    def test_prompt_contains_topic_and_products(self, products):
        synth = make_synthesizer(claude_response("report"))
        synth.synthesize(products, "AI助手工具")

        kwargs = synth._client.messages.create.call_args.kwargs
        content = kwargs["messages"][0]["content"]
        assert "AI助手工具" in content
        payload = json.loads(content.split("Product data:\n", 1)[1])
        assert [p["name"] for p in payload] == ["Notion", "Otter", "Raycast"]
        assert "votesCount" in payload[0]
        assert kwargs["system"] == REPORT_SYSTEM
        assert kwargs["max_tokens"] == 2000

    def test_system_prompt_covers_report_sections(self):
        lowered = REPORT_SYSTEM.lower()
        assert "market overview" in lowered
        assert "unmet needs" in lowered
        assert "competitive" in lowered

    def test_empty_product_set_still_calls_model(self):
        synth = make_synthesizer(claude_response("thin evidence"))
        assert synth.synthesize([], "AI notes") == "thin evidence"
        content = synth._client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "(no products found)" in content

    def test_api_error_raises_synthesis_error(self, products):
        synth = make_synthesizer(error=RuntimeError("overloaded"))
        with pytest.raises(SynthesisError):
            synth.synthesize(products, "AI notes")

    def test_blank_report_raises_synthesis_error(self, products):
        synth = make_synthesizer(claude_response("   "))
        with pytest.raises(SynthesisError, match="empty"):
            synth.synthesize(products, "AI notes")
