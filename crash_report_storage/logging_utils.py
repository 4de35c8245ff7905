"""
Logging helpers for the crash report file store.

Store modules log through ``logging.getLogger(__name__)``. Records about
a particular file carry ``session_id`` and ``path`` attributes, attached
by StorageLoggerAdapter. Hosts that ship diagnostics off the device can
render those records as JSON lines with configure_structured_logging.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

PACKAGE_LOGGER = "crash_report_storage"

# Attributes every store record is rendered with, present or not.
CONTEXT_FIELDS = ("session_id", "path")


class StorageLoggerAdapter(logging.LoggerAdapter):
    """Attaches session_id/path context to records about one file."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


class StructuredJsonFormatter(logging.Formatter):
    """
    Renders a store record as one JSON object per line.

    Keys: timestamp (UTC), level, logger, message, session_id, path and,
    when present, exception. session_id and path are null for records
    not tied to a file, so collectors see a fixed schema.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            entry[field] = None if value is None else str(value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


def configure_structured_logging(
    level: int = logging.DEBUG,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Emit the package's diagnostics as JSON lines.

    Replaces any handlers previously installed on the package logger, so
    calling this twice does not duplicate output.

    Args:
        level: Threshold for store diagnostics (default: DEBUG)
        stream: Destination (default: stdout)

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredJsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger
