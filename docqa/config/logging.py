"""Logging setup for docqa.

Terminals get one plain line per record. Log collectors get JSON lines
(``log_json=True``): the usual time, level, logger and message, plus any of
``STRUCTURED_FIELDS`` passed through ``extra=``, plus the error type, code
and traceback when the record carries an exception.

    logger.info("Stored %d records", n, extra={"duration_ms": 12})
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOGGER_NAME = "docqa"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
STRUCTURED_FIELDS = ("method", "path", "status_code", "duration_ms", "error_code")


class JSONLineFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["error"] = {
                "type": type(exc).__name__,
                "code": getattr(exc, "error_code", None),
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Attach handlers to the ``docqa`` logger; safe to call more than once.

    Records go to stderr, so CLI output on stdout stays clean, and to
    ``log_file`` when one is given.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level_no = logging.getLevelName(level.upper())
    logger.setLevel(level_no if isinstance(level_no, int) else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JSONLineFormatter() if json_format else logging.Formatter(TEXT_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
