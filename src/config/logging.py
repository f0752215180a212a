"""Logging configuration for the query tools."""

from __future__ import annotations

import logging

from src.config.settings import Settings


def configure_logging(settings: Settings) -> None:
    """Configure Python logging for the process at the settings-validated level.

    Logs go to stderr so that machine-readable command output on stdout stays clean. The level is
    applied to the root logger even when handlers already exist (e.g. under a test runner), since
    `basicConfig` would otherwise ignore it.
    """

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logging.getLogger().setLevel(settings.log_level)

    # Per-parse diagnostics are only useful when explicitly debugging.
    parser_level = logging.DEBUG if settings.log_level == "DEBUG" else logging.INFO
    logging.getLogger("src.query").setLevel(parser_level)
