# src/reqlog/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each helper returns a handler configuration dict for the builder. The access
log has exactly one destination: a rotating file (LOG_FILE) by default, or a
console stream when LOG_TO_STDOUT is set. Both write one complete record per
`emit()` under the handler's own lock, so concurrent requests never interleave
partial lines.
"""

from reqlog.config.settings import Settings


def get_console_handler(settings: Settings) -> dict:
    """
    Return a dictConfig handler entry for a console/stream handler.

    Writes to stdout rather than StreamHandler's default stderr so container
    runtimes collect the access log with the rest of the service output.
    """
    return {
        "class": "logging.StreamHandler",
        "formatter": "line",
        "level": settings.LOG_LEVEL,
        "filters": ["request_id"],
        "stream": "ext://sys.stdout",
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "line",
        "level": settings.LOG_LEVEL,
        "filename": str(settings.LOG_FILE),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id"],
    }


def get_destination_handler(settings: Settings) -> tuple[str, dict]:
    """Return (name, config) for the single handler the settings ask for."""
    if settings.LOG_TO_STDOUT:
        return "console", get_console_handler(settings)
    return "file", get_file_handler(settings)


__all__ = ["get_console_handler", "get_file_handler", "get_destination_handler"]
