"""
Tests for logging configuration.
"""

import json
import logging

from kuberly_app.utils.logging import JsonFormatter, configure_logging, get_logger


def test_configure_logging_sets_root_level():
    configure_logging(level="WARNING")
    assert logging.getLogger().level == logging.WARNING
    configure_logging(level="INFO")
    assert logging.getLogger().level == logging.INFO


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {"name": "kuberly", "levelname": "INFO", "msg": "inserted %s", "args": (7,), "record_id": 7}
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "inserted 7"
    assert payload["logger"] == "kuberly"
    assert payload["record_id"] == 7


def test_get_logger_name():
    assert get_logger("kuberly_app.test").name == "kuberly_app.test"
