from __future__ import annotations

import json
import logging
import os


class JsonFormatter(logging.Formatter):
    """Very small JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - short
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "event_type": getattr(record, "event_type", record.getMessage()),
            "command": getattr(record, "command", None),
            "key": getattr(record, "key", None),
            "entries": getattr(record, "entries", None),
            "error_category": getattr(record, "error_category", None),
        }
        return json.dumps(payload, default=str)


def configure_logging(level: str | int | None = None, fmt: str | None = None) -> None:
    """Configure logging.

    Default format is human friendly, but when ``fmt`` (or ``LOG_FORMAT``) is
    ``json`` the output becomes one JSON object per line. Records never carry
    passwords or note contents, only event names, keys and counts.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = level.upper()

    fmt = (fmt or os.getenv("LOG_FORMAT", "plain")).lower()
    if fmt == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%H:%M:%S",
            force=True,
        )
