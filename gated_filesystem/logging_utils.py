"""
Logging helpers for the gated filesystem.

Every authorization decision and operation attempt is traced through the
stdlib loggers under ``gated_filesystem``. Records may carry the context
fields in CONTEXT_FIELDS; StructuredJsonFormatter renders those as JSON keys
so a host can filter traces by operation or path.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import IO, Any

from .protocol import Operation

PACKAGE_LOGGER = "gated_filesystem"

# Record attributes carried into structured output when present
CONTEXT_FIELDS = ("operation", "path", "permission", "decision")


class StructuredJsonFormatter(logging.Formatter):
    """Render a trace record as one JSON object per line.

    Output keys: ``ts`` (record creation time, UTC ISO 8601), ``level``,
    ``logger``, ``msg``, any CONTEXT_FIELDS set on the record, and ``exc``
    when exception info is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_structured_logging(
    level: int | str = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Switch the package logger to structured JSON output.

    Replaces a JSON handler installed by an earlier call, leaving any other
    handlers on the package logger alone.

    Args:
        level: Level for the package logger
        stream: Destination, stdout by default

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        if isinstance(handler.formatter, StructuredJsonFormatter):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredJsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


class OperationLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter stamping operation context onto every record.

    The caller's ``extra`` mapping is never modified; context from the
    adapter wins over per-call keys of the same name.
    """

    @classmethod
    def for_operation(cls, logger: logging.Logger, operation: Operation) -> OperationLoggerAdapter:
        return cls(logger, {"operation": operation.kind.value, "path": operation.path})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs
