# src/reqlog/core/logging/builder.py
"""
Logging builder: turn Settings into a live access-log sink and attach it to a
logger, optionally moving its file I/O onto a background QueueListener.

This module:
 - builds a dictConfig-compatible mapping from Settings (make_dict_config)
 - instantiates the handler that mapping describes without applying it
   process-wide (build_handler); logging.config.dictConfig() would close every
   handler in the process, the host application's included
 - attaches a sink to one logger (attach_sink). Only handlers reqlog itself
   attached are ever removed or closed
 - setup_logging(): the shared "reqlog" tree used by RequestLoggerMiddleware
 - open_sink_logger(): a dedicated "reqlog.access.sink<N>" logger per wrap call
 - in queue mode (LOG_USE_QUEUE) the real handler sits behind a QueueListener
   and the logger only gets a QueueHandler, so request tasks only enqueue
 - stop_queue_logging() flushes & stops the listeners, shutdown_logging()
   detaches every sink.

Configuration knobs (on your Settings object):
 - LOG_FILE, LOG_TO_STDOUT: destination (rotating file, or stdout)
 - LOG_LEVEL: minimum severity
 - LOG_PREFIX_FORMAT: "production" | "debugging" line prefix
 - LOG_MAX_BYTES, LOG_BACKUP_COUNT: file rotation
 - LOG_USE_QUEUE: enable the queue-backed sink
"""

from __future__ import annotations

import itertools
from pathlib import Path
import logging
import logging.config
import queue as _queue
from logging.handlers import QueueHandler, QueueListener

from reqlog.config.settings import Settings
from reqlog.utils.logging import get_project_version

from .callbacks import ACCESS_LOGGER_NAME
from .formatters import LineFormatter
from .filters import RequestIdFilter
from .handlers import get_destination_handler

ROOT_LOGGER_NAME = "reqlog"
SINK_LOGGER_PREFIX = f"{ACCESS_LOGGER_NAME}.sink"

logger = logging.getLogger(ROOT_LOGGER_NAME)

# Handlers and listeners reqlog attached, keyed by logger name
_SINK_HANDLERS: dict[str, logging.Handler] = {}
_QUEUE_LISTENERS: dict[str, QueueListener] = {}

_sink_ids = itertools.count(1)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "line" (LineFormatter with the configured prefix)
      - filters: "request_id"
      - handlers: exactly one of "file" / "console"
      - loggers: "reqlog" (the access logger "reqlog.access" propagates to it)

    setup_logging() does not hand this to dictConfig(); hosts that own the
    process-wide logging config can merge it into theirs.
    """
    handler_name, handler = get_destination_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "line": {
                "()": LineFormatter,
                "prefix": settings.LOG_PREFIX_FORMAT,
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "handlers": {handler_name: handler},
        "loggers": {
            ROOT_LOGGER_NAME: {
                "handlers": [handler_name],
                "level": settings.LOG_LEVEL,
                "propagate": False,
            },
        },
    }


def build_handler(settings: Settings) -> logging.Handler:
    """
    Instantiate the destination handler described by make_dict_config().

    Only the formatter, filter and handler entries are resolved, through the
    stdlib DictConfigurator; no existing logger or handler is touched.
    """
    handler_name, _ = get_destination_handler(settings)
    configurator = logging.config.DictConfigurator(make_dict_config(settings))
    config = configurator.config

    formatters = config["formatters"]
    for name in list(formatters):
        formatters[name] = configurator.configure_formatter(formatters[name])
    filters = config["filters"]
    for name in list(filters):
        filters[name] = configurator.configure_filter(filters[name])

    return configurator.configure_handler(config["handlers"][handler_name])


def attach_sink(target: logging.Logger, settings: Settings) -> logging.Logger:
    """
    Point `target` at the destination described by `settings` and return it.

    Steps:
      1. Detach the sink reqlog attached to `target` earlier, if any.
      2. Create LOG_FILE's parent directory when logging to a file.
      3. Build the handler; in queue mode put it behind a QueueListener and
         attach a QueueHandler (with a producer-side RequestIdFilter, so the
         contextvar is read in the request's context, not the listener's).
      4. Set the level, stop propagation.
      5. Log one startup line naming destination, level and version.
    """
    detach_sink(target)

    if not settings.LOG_TO_STDOUT:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

    handler = build_handler(settings)
    queued = getattr(settings, "LOG_USE_QUEUE", False)
    if queued:
        log_queue: _queue.Queue = _queue.Queue()
        listener = QueueListener(log_queue, handler, respect_handler_level=True)
        listener.start()
        _QUEUE_LISTENERS[target.name] = listener

        handler = QueueHandler(log_queue)
        handler.addFilter(RequestIdFilter())

    target.addHandler(handler)
    target.setLevel(settings.LOG_LEVEL)
    target.propagate = False
    _SINK_HANDLERS[target.name] = handler

    destination = "stdout" if settings.LOG_TO_STDOUT else str(settings.LOG_FILE)
    target.info(
        "reqlog %s logging to %s at level %s%s",
        get_project_version(),
        destination,
        settings.LOG_LEVEL,
        " (queued)" if queued else "",
    )
    return target


def detach_sink(target: logging.Logger) -> None:
    """Remove and close the sink reqlog attached to `target`. Other handlers stay."""
    listener = _QUEUE_LISTENERS.pop(target.name, None)
    if listener is not None:
        listener.stop()
        for h in listener.handlers:
            h.close()

    handler = _SINK_HANDLERS.pop(target.name, None)
    if handler is not None:
        target.removeHandler(handler)
        handler.close()


def setup_logging(settings: Settings) -> None:
    """
    Initialize the shared access log sink on the "reqlog" logger tree.

    Used by RequestLoggerMiddleware and anything logging on "reqlog.access"
    directly. Call again to move the sink; the previous one is closed.
    """
    attach_sink(logging.getLogger(ROOT_LOGGER_NAME), settings)


def open_sink_logger(settings: Settings) -> logging.Logger:
    """
    Return a fresh "reqlog.access.sink<N>" logger with its own sink.

    Each wrap call gets one, so its destination and level never leak into
    other wrapped handlers or the shared "reqlog" tree.
    """
    return attach_sink(logging.getLogger(f"{SINK_LOGGER_PREFIX}{next(_sink_ids)}"), settings)


def stop_queue_logging() -> None:
    """
    Stop every QueueListener (flushing queued records) and close the handlers
    behind them. No-op when queue mode is not active.
    """
    while _QUEUE_LISTENERS:
        _, listener = _QUEUE_LISTENERS.popitem()
        try:
            listener.stop()  # enqueues the sentinel and joins the listener thread
        finally:
            for h in listener.handlers:
                h.close()


def shutdown_logging() -> None:
    """Detach and close every sink reqlog attached."""
    stop_queue_logging()
    for name in list(_SINK_HANDLERS):
        detach_sink(logging.getLogger(name))


__all__ = [
    "ROOT_LOGGER_NAME",
    "make_dict_config",
    "build_handler",
    "attach_sink",
    "detach_sink",
    "setup_logging",
    "open_sink_logger",
    "stop_queue_logging",
    "shutdown_logging",
]
