"""Tests for configure_logging() and the JSON line formatter."""

from __future__ import annotations

import json
import logging

import pytest

from dojo_progression.config import LoggingConfig
from dojo_progression.utils.logging import _JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "dojo_progression.club.loader", logging.INFO, __file__, 1, msg, None, None
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_fields():
    payload = json.loads(_JsonFormatter().format(_record("Loaded club config")))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "dojo_progression.club.loader"
    assert payload["msg"] == "Loaded club config"
    assert payload["ts"].endswith("Z")


def test_json_formatter_lifts_extra_fields():
    payload = json.loads(_JsonFormatter().format(_record("x", belt_id="yellow", belts=7)))
    assert payload["belt_id"] == "yellow"
    assert payload["belts"] == 7
    assert "args" not in payload
    assert "levelno" not in payload


def test_configure_logging_sets_level_and_console():
    configure_logging(LoggingConfig(level="warning"))
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "engine.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_file), json_format=True))
    logging.getLogger("dojo_progression.models.club").warning("stale ids: %s", ["purple"])
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["level"] == "WARNING"
    assert payload["msg"] == "stale ids: ['purple']"
