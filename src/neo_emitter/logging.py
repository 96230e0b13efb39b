"""Structured JSON logging for emitter internals."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging import Logger
from typing import Dict

_LOGGER_NAME = "neo_emitter"

# Attributes passed through ``extra=`` that end up in the JSON line.
_RECORD_EXTRAS = ("event", "payload", "event_type")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        line = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for attr in _RECORD_EXTRAS:
            if hasattr(record, attr):
                line[attr] = getattr(record, attr)
        # Event types and payload values need not be JSON native.
        return json.dumps(line, ensure_ascii=False, default=str)


def _level_from_env() -> int:
    name = os.environ.get("NEO_EMITTER_LOG_LEVEL") or os.environ.get("LOG_LEVEL", "INFO")
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str | None = None) -> Logger:
    """Return a logger under the ``neo_emitter`` namespace writing JSON lines.

    The level comes from ``NEO_EMITTER_LOG_LEVEL``, then ``LOG_LEVEL``,
    then INFO.
    """

    logger = logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
    return logger


def log_event(
    logger: Logger, event: str, payload: Dict[str, object] | None = None
) -> None:
    """Log one named emitter event with its payload at INFO."""

    logger.info(f"event={event}", extra={"event": event, "payload": payload or {}})
