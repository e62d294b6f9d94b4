from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Any, Dict, Iterable

from settings import get_settings

LOG_FORMAT = "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Context attached through ``extra=`` by the archive, loader and sampler.
CONTEXT_KEYS = ("date", "variable", "year", "record_count", "error_count", "reason", "source")

_configured = False


class ContextualFormatter(logging.Formatter):
    """Append known ``extra`` fields to the message as ``key=value`` pairs."""

    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys = tuple(extra_keys or CONTEXT_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in self._extra_keys
            if getattr(record, key, None) is not None
        )
        return f"{message} | {context}" if context else message


def build_logging_config(level: str | int) -> Dict[str, Any]:
    """Return the ``dictConfig`` mapping used by the CLI and the HTTP app.

    Log output goes to stderr so query results printed on stdout stay parseable.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": f"{__name__}.ContextualFormatter",
                "fmt": LOG_FORMAT,
                "datefmt": LOG_DATE_FORMAT,
                "extra_keys": list(CONTEXT_KEYS),
            }
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "contextual",
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    global _configured
    if _configured:
        return
    dictConfig(build_logging_config(level if level is not None else get_settings().log_level))
    _configured = True
