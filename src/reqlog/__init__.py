"""
reqlog: correlated, colorized request logging for Python web handlers.

    from reqlog import wrap_with_logger
    handler = wrap_with_logger(handler, "logs/ring.log")
"""

from .core.logging import (
    RequestLoggerMiddleware,
    make_logger_middleware,
    setup_logging,
    wrap_with_logger,
    wrap_with_plaintext_logger,
)

__all__ = [
    "RequestLoggerMiddleware",
    "make_logger_middleware",
    "setup_logging",
    "wrap_with_logger",
    "wrap_with_plaintext_logger",
]
