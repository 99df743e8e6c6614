"""
Command-line research runner.

Usage:
    python cli.py "AI note-taking apps"
    product-radar "智能获客" --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from config.settings import Settings
from core.errors import ResearchError
from core.researcher import build_pipeline

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Research a product topic on Product Hunt and print an AI analysis report.",
    )
    parser.add_argument("topic", nargs="?", help="Product topic to research")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result (content, keywords, products) as JSON",
    )
    args = parser.parse_args(argv)

    if not args.topic or not args.topic.strip():
        print("Please provide a product topic to research.", file=sys.stderr)
        return 1

    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    try:
        settings = Settings()
        settings.validate()
        result = build_pipeline(settings).run(args.topic)
    except ResearchError as exc:
        print(f"Research failed: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_wire(), ensure_ascii=False, indent=2))
        return 0

    print(f"Keywords: {', '.join(result.keywords)}")
    print(f"Products: {len(result.products)}")
    print()
    print(result.content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
