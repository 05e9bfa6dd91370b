from __future__ import annotations

import json
import logging

from pixqr.config import LoggingConfig
from pixqr.logging_conf import JsonFormatter, configure_logging


def test_json_formatter_merges_extra_fields() -> None:
    record = logging.LogRecord("pixqr.cache", logging.INFO, __file__, 1, "render cache eviction", None, None)
    record.capacity = 100
    payload = json.loads(JsonFormatter().format(record))
    assert payload == {"level": "INFO", "logger": "pixqr.cache", "message": "render cache eviction", "capacity": 100}


def test_configure_logging_installs_json_handler() -> None:
    configure_logging(LoggingConfig(level="DEBUG", json_logs=True))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    configure_logging(LoggingConfig(level="INFO", json_logs=False))
    assert not isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)
