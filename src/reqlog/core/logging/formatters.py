# src/reqlog/core/logging/formatters.py

"""
Line formatter for the access log.

Two prefix layouts are available, selected by Settings.LOG_PREFIX_FORMAT:

  - production: "2025-09-26 12:31:45,038 [INFO] : <message>"
  - debugging:  same, plus the pathname:lineno of the logging call

Locating the calling frame is what makes the debugging layout expensive; keep
it out of production.

Traceback text (exc_info) is appended after the message on its own lines, as
the stock logging.Formatter does. The formatter does not touch ANSI codes:
whether a line is colored is decided by the callback variant (colored or plain)
that produced it, not by the sink.
"""

import logging
from logging import LogRecord

from reqlog.exceptions import ConfigurationError

PREFIX_FORMATS: dict[str, str] = {
    "production": "%(asctime)s [%(levelname)s] : %(message)s",
    "debugging": "%(asctime)s %(pathname)s:%(lineno)d [%(levelname)s] : %(message)s",
}


def get_prefix_format(name: str) -> str:
    """Return the format string registered under `name` ("production" or "debugging")."""
    try:
        return PREFIX_FORMATS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown log prefix format {name!r}; expected one of {sorted(PREFIX_FORMATS)}",
            field="LOG_PREFIX_FORMAT",
        ) from None


class LineFormatter(logging.Formatter):
    """
    Human-readable, one-record-per-line formatter.

    Construction:
      - prefix: "production" (default) or "debugging", see PREFIX_FORMATS.
      - datefmt: optional date format passed to logging.Formatter.

    Records without a `request_id` (no RequestIdFilter on the handler) get "-"
    so custom format strings referencing %(request_id)s stay safe.
    """

    def __init__(self, prefix: str = "production", datefmt: str | None = None) -> None:
        super().__init__(fmt=get_prefix_format(prefix), datefmt=datefmt)
        self.prefix = prefix

    def format(self, record: LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return super().format(record)


__all__ = ["PREFIX_FORMATS", "get_prefix_format", "LineFormatter"]
