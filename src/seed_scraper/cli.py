"""Command-line interface for SeedScraper."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace

from seed_scraper.config import Settings
from seed_scraper.models import InvalidRequestError, ScrapeRequest, ScrapeStatus
from seed_scraper.pipeline import scrape
from seed_scraper.providers import list_providers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seed-scraper",
        description="Scrape a seed vendor product page into normalized growing specs.",
    )
    parser.add_argument("url", nargs="?", help="Vendor product page URL")
    parser.add_argument(
        "--known-type",
        action="append",
        dest="known_types",
        default=None,
        metavar="TYPE",
        help="Plant type already in the catalog (repeatable); used for Baker Creek names",
    )
    parser.add_argument(
        "--skip-ai-fallback",
        action="store_true",
        help="Do not run the AI web-search fallback",
    )
    parser.add_argument(
        "-p", "--provider",
        choices=list_providers(),
        default=None,
        help="AI structured extractor (default: from .env EXTRACTOR_PROVIDER)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Global scrape timeout in seconds (default: 15)",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API instead of scraping one URL",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for --serve")
    parser.add_argument("--port", type=int, default=8000, help="Port for --serve")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.serve:
        import uvicorn

        uvicorn.run("seed_scraper.api:app", host=args.host, port=args.port)
        return 0

    if not args.url:
        parser.error("url is required unless --serve is given")

    settings = Settings.from_env()

    # Apply CLI overrides
    overrides: dict = {}
    if args.provider:
        overrides["extractor_provider"] = args.provider
    if args.timeout is not None:
        if args.timeout <= 0:
            parser.error("--timeout must be positive")
        overrides["scrape_timeout"] = args.timeout
    if overrides:
        settings = replace(settings, **overrides)

    request = ScrapeRequest(
        url=args.url,
        known_plant_types=args.known_types,
        skip_ai_fallback=args.skip_ai_fallback,
    )
    try:
        outcome = asyncio.run(scrape(request, settings))
    except InvalidRequestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    output = json.dumps(outcome.to_payload(), indent=2, ensure_ascii=False)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(output)

    return 1 if outcome.scrape_status is ScrapeStatus.FAILED else 0


if __name__ == "__main__":
    sys.exit(main())
