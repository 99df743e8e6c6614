"""
Flask web server for Product Radar.

Routes
──────
POST /api/research   Run a full research pass for {"topic": "..."} (JSON)
GET  /api/health     Liveness check (JSON)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config.settings import Settings
from core.errors import ResearchError
from core.researcher import ResearchPipeline, build_pipeline

logger = logging.getLogger(__name__)

PIPELINE_KEY = "research_pipeline"


def create_app(
    pipeline: Optional[ResearchPipeline] = None,
    settings: Optional[Settings] = None,
    testing: bool = False,
) -> Flask:
    """Build the Flask application.

    Args:
        pipeline: Pre-built pipeline (tests pass a mock). When omitted one is
            wired from *settings*.
        settings: Configuration; read from the environment when omitted and
            validated, so missing credentials fail at start-up.
        testing: Enables Flask testing mode and skips CORS registration.

    Raises:
        ConfigError: If *pipeline* is omitted and a required setting is missing.
    """
    app = Flask(__name__)
    app.config["TESTING"] = testing

    if pipeline is None:
        settings = settings or Settings()
        settings.validate()
        pipeline = build_pipeline(settings)
    app.extensions[PIPELINE_KEY] = pipeline

    # The frontend dev server runs on a different origin
    if not app.config.get("TESTING"):
        CORS(app)

    # ── Health ─────────────────────────────────────────────────────────────

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok"})

    # ── Research ───────────────────────────────────────────────────────────

    @app.route("/api/research", methods=["POST"])
    def research_endpoint():
        """Research a topic and return the report, keywords and products.

        Body: {"topic": str}. Any other fields are ignored.
        """
        body = request.get_json(silent=True) or {}
        topic = body.get("topic") if isinstance(body, dict) else None
        if not isinstance(topic, str) or not topic.strip():
            return jsonify({"message": "A topic is required."}), 400

        try:
            result = app.extensions[PIPELINE_KEY].run(topic)
        except ResearchError as exc:
            return jsonify({"message": str(exc) or "Research failed."}), 500
        except Exception:
            logger.exception("Unexpected error researching topic=%r", topic)
            return jsonify({"message": "Internal server error."}), 500

        return jsonify(result.to_wire())

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    settings = Settings()
    app = create_app(settings=settings)
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
