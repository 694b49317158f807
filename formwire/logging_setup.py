"""Central logging configuration.

Codec, API client and webhook loggers log event names (`decoder.unknown_field_type`,
`webhook.received`) and put their context in `extra=`. The console formatter
appends that context as key=value pairs so it is not lost on stdout. uvicorn
loggers share the same handler.
"""
from __future__ import annotations
import copy
import logging
from logging.config import dictConfig
from typing import Any, Dict

# Attributes every LogRecord has; anything else arrived through `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class EventFormatter(logging.Formatter):
    """Format a record, then append its `extra=` context in key order."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not context:
            return line
        pairs = " ".join(f"{k}={context[k]!r}" for k in sorted(context))
        return f"{line} {pairs}"


_DICT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "event": {
            "()": EventFormatter,
            "fmt": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "formatter": "event",
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "WARNING", "handlers": ["stdout"]},
    "loggers": {
        "formwire": {"level": "INFO"},
        "uvicorn": {"level": "INFO", "handlers": ["stdout"], "propagate": False},
        "uvicorn.error": {"level": "INFO", "handlers": ["stdout"], "propagate": False},
        "uvicorn.access": {"level": "INFO", "handlers": ["stdout"], "propagate": False},
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Send formwire logs at `level` to stdout.

    When the root logger is already configured by the host (a test runner,
    an embedding application), only the formwire logger level is changed.
    """
    if logging.getLogger().handlers:
        logging.getLogger("formwire").setLevel(level)
        return
    config = copy.deepcopy(_DICT_CONFIG)
    config["loggers"]["formwire"]["level"] = level
    dictConfig(config)


__all__ = ["EventFormatter", "configure_logging"]
