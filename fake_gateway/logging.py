"""Logging setup for the gateway.

Log calls attach transaction context through ``extra``::

    logger.info("Voided %s", tx.id, extra={"transaction_id": tx.id, "status": "voided"})

:class:`JsonFormatter` lifts the keys in ``CONTEXT_FIELDS`` into each JSON
line, so a test run's log can be filtered by transaction. The plain format
keeps to the message.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

CONTEXT_FIELDS = ("transaction_id", "refunded_transaction_id", "status", "token", "amount")

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Per-request access lines and faker's provider chatter
_NOISY_LOGGERS = ("uvicorn.access", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Route all logging to a single handler on ``stream``.

    Parameters
    ----------
    level : str
        Log level name. Unknown names fall back to INFO.
    format_type : str
        "json" for :class:`JsonFormatter`, anything else for the plain format.
    stream : IO[str] | None
        Where to write. Defaults to stdout.

    Returns
    -------
    logging.Handler
        The handler now attached to the root logger.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    logging.getLogger("fake_gateway").setLevel(log_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object, with its transaction context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a gateway module (pass ``__name__``)."""
    return logging.getLogger(name)
