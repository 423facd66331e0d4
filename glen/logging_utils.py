"""Logging utilities for glen."""

from __future__ import annotations

import json
import logging
import sys

EXTRA_FIELDS = ("scope", "scope_path")


class StructuredFormatter(logging.Formatter):
    """Formatter that can emit JSON lines when configured."""

    def __init__(self, json_mode: bool = False):
        super().__init__()
        self.json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        if self.json_mode:
            payload = {"level": record.levelname, "message": record.getMessage()}
            for name in EXTRA_FIELDS:
                if hasattr(record, name):
                    payload[name] = getattr(record, name)
            return json.dumps(payload)
        return f"[{record.levelname:<7}] {record.getMessage()}"


def setup_logging(json_mode: bool = False, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("glen")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(json_mode=json_mode))
    logger.addHandler(handler)
    return logger
