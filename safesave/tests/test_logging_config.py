"""
Tests for structured logging setup.
"""

import io
import json
import logging

import pytest

from safesave.logging_config import get_logger, setup_logging, trace_id_for


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_includes_trace_id(monkeypatch, restore_root_logger):
    monkeypatch.setenv("SAFESAVE_LOG_LEVEL", "INFO")
    monkeypatch.setenv("SAFESAVE_LOG_FORMAT", "json")
    stream = io.StringIO()

    setup_logging(stream)
    get_logger("safesave.test", trace_id="abc123").warning("Import rejected")

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["message"] == "Import rejected"
    assert record["level"] == "WARNING"
    assert record["logger"] == "safesave.test"
    assert record["trace_id"] == "abc123"


def test_text_format_without_adapter(monkeypatch, restore_root_logger):
    monkeypatch.setenv("SAFESAVE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SAFESAVE_LOG_FORMAT", "text")
    stream = io.StringIO()

    setup_logging(stream)
    logging.getLogger("safesave.plain").debug("hello")

    assert "[N/A] hello" in stream.getvalue()


def test_level_filters(monkeypatch, restore_root_logger):
    monkeypatch.setenv("SAFESAVE_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("SAFESAVE_LOG_FORMAT", "text")
    stream = io.StringIO()

    setup_logging(stream)
    logging.getLogger("safesave.plain").warning("quiet")

    assert stream.getvalue() == ""


def test_trace_id_for():
    assert trace_id_for("AbCdEfGhIjKlMnOp") == "AbCdEfGhIjKl"
    assert trace_id_for(None) == "N/A"
    assert trace_id_for("") == "N/A"
    assert trace_id_for(42) == "N/A"


def test_unknown_settings_fall_back(monkeypatch, restore_root_logger):
    monkeypatch.setenv("SAFESAVE_LOG_LEVEL", "CHATTY")
    monkeypatch.setenv("SAFESAVE_LOG_FORMAT", "yaml")
    stream = io.StringIO()

    setup_logging(stream)
    logging.getLogger("safesave.plain").debug("hidden")
    logging.getLogger("safesave.plain").info("shown")

    lines = stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["message"] == "shown"
    assert len(logging.getLogger().handlers) == 1
