"""Tests for configure_logging text and JSON output."""

import json
import logging

import pytest

from shared.log import ROOT_LOGGER, TRACE, create_logger
from shared.logging_config import configure_logging, resolve_level


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo configure_logging so other tests see the default logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.mark.parametrize("name,level", [
    ("trace", TRACE),
    ("debug", logging.DEBUG),
    ("INFO", logging.INFO),
    ("warning", logging.WARNING),
    ("error", logging.ERROR),
    ("bogus", logging.INFO),
])
def test_resolve_level(name, level):
    assert resolve_level(name) == level


def test_json_output(capsys):
    configure_logging("info", "json")
    _, _, log_info, _, _ = create_logger("Mirror")
    log_info("filling 2 missing captures")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["msg"] == "filling 2 missing captures"
    assert record["level"] == "INFO"
    assert record["name"] == "reflector.mirror"
    assert "ts" in record


def test_text_output(capsys):
    configure_logging("warning", "text")
    _, _, log_info, log_warn, _ = create_logger("Store")
    log_info("quiet")
    log_warn("unexpected entry in store")

    err = capsys.readouterr().err
    assert "quiet" not in err
    assert "[WARNING] reflector.store: unexpected entry in store" in err


def test_trace_output(capsys):
    configure_logging("trace", "text")
    log_trace, _, _, _, _ = create_logger("Store")
    log_trace("missing 2023-10-14")
    assert "[TRACE] reflector.store: missing 2023-10-14" in capsys.readouterr().err


def test_repeated_configuration_single_handler():
    configure_logging("info", "text")
    handler = configure_logging("info", "json")
    assert logging.getLogger(ROOT_LOGGER).handlers == [handler]
