"""Tests for logging configuration."""

import json
import logging

from zatcaqr.logging_conf import JsonFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("zatcaqr.codec", logging.INFO, __file__, 1, "encoded %s", ("invoice",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_core_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(_record()))
        assert payload == {"level": "INFO", "logger": "zatcaqr.codec", "message": "encoded invoice"}

    def test_extra_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(_record(tlv_bytes=98, field="seller_name")))
        assert payload["tlv_bytes"] == 98
        assert payload["field"] == "seller_name"

    def test_keeps_non_ascii(self) -> None:
        line = JsonFormatter().format(_record(seller="الجواهري"))
        assert "الجواهري" in line


def test_configure_logging_sets_level() -> None:
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        configure_logging(level="debug", json_logs=True)
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
