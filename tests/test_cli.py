"""Tests for cli.py — the command-line runner."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import cli
from core.errors import NoResultsError
from core.models import ResearchResult
from tests.helpers import make_product


def fake_result() -> ResearchResult:
    return ResearchResult(
        content="## Market overview", keywords=("ai", "notes"), products=(make_product("Otter"),)
    )


class TestMain:
    def test_missing_topic_exits_1(self, capsys):
        assert cli.main([]) == 1
        assert "topic" in capsys.readouterr().err

    @patch("cli.build_pipeline")
    @patch("cli.Settings")
    def test_prints_report(self, mock_settings, mock_build, capsys):
        mock_build.return_value.run.return_value = fake_result()

        assert cli.main(["AI notes"]) == 0

        out = capsys.readouterr().out
        assert "Keywords: ai, notes" in out
        assert "Products: 1" in out
        assert "## Market overview" in out
        mock_settings.return_value.validate.assert_called_once()

    @patch("cli.build_pipeline")
    @patch("cli.Settings")
    def test_json_output(self, mock_settings, mock_build, capsys):
        mock_build.return_value.run.return_value = fake_result()

        assert cli.main(["AI notes", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["keywords"] == ["ai", "notes"]
        assert data["products"][0]["name"] == "Otter"

    @patch("cli.build_pipeline")
    @patch("cli.Settings", MagicMock())
    def test_pipeline_failure_exits_1(self, mock_build, capsys):
        mock_build.return_value.run.side_effect = NoResultsError("No related products were found.")

        assert cli.main(["AI notes"]) == 1
        assert "No related products" in capsys.readouterr().err
