"""Structured JSON logging helpers for the transducer package."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging import Logger
from typing import Dict

_LOGGER_NAME = "transducer"
_LEVEL_ENV = "TRANSDUCER_LOG_LEVEL"

# Pipeline context promoted to top-level keys of each JSON line.
CONTEXT_KEYS = ("stages", "elements", "document")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        payload = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        if hasattr(record, "payload"):
            payload["payload"] = getattr(record, "payload")
        for key in CONTEXT_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        # Stage kinds are enums and payloads may carry Decimal seeds.
        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(name: str | None = None) -> Logger:
    """Return a ``transducer.<name>`` logger writing one JSON object per line.

    Library use stays quiet by default; set ``TRANSDUCER_LOG_LEVEL`` to
    ``INFO`` or ``DEBUG`` to see composition and execution events.
    """

    logger_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
        level = os.environ.get(_LEVEL_ENV, "WARNING").upper()
        logger.setLevel(getattr(logging, level, logging.WARNING))
    return logger


def log_event(
    logger: Logger,
    event: str,
    payload: Dict[str, object] | None = None,
    level: int = logging.INFO,
    **context: object,
) -> None:
    """Log a pipeline event; ``context`` must use names from ``CONTEXT_KEYS``."""

    unknown = set(context) - set(CONTEXT_KEYS)
    if unknown:
        raise ValueError(f"Unknown log context keys: {sorted(unknown)}")
    extra = {"event": event, "payload": payload or {}, **context}
    logger.log(level, f"event={event}", extra=extra)
