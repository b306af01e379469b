"""Logging configuration for reflector command-line runs."""

from __future__ import annotations

import logging

from pythonjsonlogger import json as jsonlogger

from shared.log import ROOT_LOGGER, TRACE

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: str) -> int:
    """Translate a level name ("trace", "debug", "info", ...) into a logging level."""
    if log_level.lower() == "trace":
        return TRACE
    return getattr(logging, log_level.upper(), logging.INFO)


def configure_logging(log_level: str = "info", log_format: str = "text") -> logging.Handler:
    """Configure the reflector logger with text or structured JSON output.

    JSON output format: {"ts": "...", "level": "...", "name": "...", "msg": "..."}

    Args:
        log_level: Logging level string (e.g., "info", "debug", "warning").
        log_format: "text" for human-readable lines, "json" for one JSON object per line.

    Returns:
        The installed handler.
    """
    level = resolve_level(log_level)

    if log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "ts",
                "levelname": "level",
                "message": "msg",
            },
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(ROOT_LOGGER)
    # Clear any existing handlers to avoid duplicate output on repeated CLI runs
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
