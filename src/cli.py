"""Command-line entry point: parse one query and print the descriptor, description and verdict."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime

from dotenv import load_dotenv

from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.query.describer import describe
from src.query.parser import parse
from src.query.validator import validate

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


def _parse_now(value: str) -> datetime:
    try:
        now = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO timestamp: {value}") from exc
    # Naive timestamps are taken as local time.
    return now if now.tzinfo is not None else now.astimezone()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interpret a natural-language business query as a structured descriptor.",
    )
    parser.add_argument("query", nargs="+", help="The query text, e.g. 'invoices over $5000'.")
    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Pin the current time (ISO 8601) used to resolve relative dates.",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Print the descriptor as a single JSON line.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for parsing a single query."""

    args = build_arg_parser().parse_args(argv)

    load_dotenv(".env")
    try:
        settings = load_settings()
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR
    configure_logging(settings)

    clock = (lambda: args.now) if args.now is not None else None
    query = parse(" ".join(args.query), clock=clock, default_limit=settings.default_limit)
    result = validate(query, max_limit=settings.max_limit)

    indent = None if args.compact else 2
    print(json.dumps(query.model_dump(mode="json"), indent=indent))
    print(describe(query))

    if not result.valid:
        for error in result.errors:
            print(f"error: {error.message}", file=sys.stderr)
        logger.info("invalid query entity=%s errors=%d", query.entity, len(result.errors))
        return EXIT_INVALID

    logger.info("parsed query entity=%s confidence=%.2f", query.entity, query.confidence)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
