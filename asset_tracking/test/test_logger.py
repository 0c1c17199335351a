"""
Tests for the JSON logger.
"""

import json
import sys
import logging

from asset_tracking.logger import JsonFormatter, get_logger


def test_json_formatter_outputs_selected_fields():
    formatter = JsonFormatter({"level": "levelname", "logger": "name", "message": "message"})
    record = logging.LogRecord("asset_tracking.test", logging.WARNING, __file__, 10,
                               "Skipping seed record #%d", (3,), None)
    payload = json.loads(formatter.format(record))
    assert payload == {
        "level": "WARNING",
        "logger": "asset_tracking.test",
        "message": "Skipping seed record #3",
    }


def test_json_formatter_includes_exception():
    formatter = JsonFormatter()
    try:
        raise ValueError("bad rate")
    except ValueError:
        record = logging.LogRecord("asset_tracking", logging.ERROR, __file__, 20, "failed", None, sys.exc_info())
    payload = json.loads(formatter.format(record))
    assert payload["message"] == "failed"
    assert "ValueError: bad rate" in payload["exc_info"]


def test_get_logger_returns_singleton_and_children():
    root = get_logger()
    assert root is get_logger("asset_tracking")
    assert root.handlers, "singleton logger should have handlers"
    child = get_logger("asset_tracking.business.repository")
    assert child.name == "asset_tracking.business.repository"
    assert child.parent is root
