# src/reqlog/core/logging/callbacks.py
"""
The three request log callbacks: start, finish and exception.

Each callback formats one event of a request's lifecycle and emits it on the
access logger ("reqlog.access"):

  pre_logger(id, request)                          -> "Starting ..." (+ "Params: ..." line)
  post_logger(id, request, response, elapsed_ms)   -> "Finished ... in (N ms) Status: S"
  exception_logger(id, request, error, elapsed_ms) -> "Exception! ..." + traceback line

Lines are colorized with ANSI codes: the request id by its colour pair, the
elapsed time and status by how bad they are. The plain_* variants are the same
callbacks wrapped by `without_ansi()`, which strips decoration on the way into
the logger.

Severity:
  - start lines and ordinary finish lines are INFO
  - finish lines with a numeric status >= 500 are ERROR
  - exception lines are always ERROR
A 4xx status is painted red but stays INFO.
"""

import functools
import logging
import numbers
from enum import IntEnum
from typing import Any, Callable, NamedTuple

from .ansi import AnsiStrippingAdapter, style
from .colors import DEFAULT_PALETTE, Palette, format_id
from .views import RequestView, response_status

ACCESS_LOGGER_NAME = "reqlog.access"
access_logger = logging.getLogger(ACCESS_LOGGER_NAME)

STATUS_PLACEHOLDER = "???"
ELAPSED_PLACEHOLDER = "??"


class Emphasis(IntEnum):
    NONE = 0
    MODERATE = 1
    STRONG = 2
    STRONGEST = 3


EMPHASIS_STYLES: dict[Emphasis, tuple[str, ...]] = {
    Emphasis.NONE: ("default",),
    Emphasis.MODERATE: ("yellow",),
    Emphasis.STRONG: ("red",),
    Emphasis.STRONGEST: ("bright", "red"),
}


def is_number(value: Any) -> bool:
    """True for real numbers; bools are not treated as numbers."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def classify_elapsed(elapsed_ms: Any) -> Emphasis | None:
    """Emphasis for a request duration in milliseconds, None if it is not a number."""
    if not is_number(elapsed_ms):
        return None
    if elapsed_ms >= 1500:
        return Emphasis.STRONGEST
    if elapsed_ms >= 1000:
        return Emphasis.STRONG
    if elapsed_ms >= 500:
        return Emphasis.MODERATE
    return Emphasis.NONE


def classify_status(status: Any) -> Emphasis | None:
    """Emphasis for an HTTP status, None if it is not a number."""
    if not is_number(status):
        return None
    if status < 300:
        return Emphasis.NONE
    if status >= 500:
        return Emphasis.STRONGEST
    if status >= 400:
        return Emphasis.STRONG
    return Emphasis.MODERATE


def is_error_status(status: Any) -> bool:
    return is_number(status) and status >= 500


def render_elapsed(elapsed_ms: Any) -> str:
    emphasis = classify_elapsed(elapsed_ms)
    if emphasis is None:
        return ELAPSED_PLACEHOLDER
    return style(elapsed_ms, *EMPHASIS_STYLES[emphasis])


def render_status(status: Any) -> str:
    emphasis = classify_status(status)
    if emphasis is None:
        return STATUS_PLACEHOLDER
    return style(status, *EMPHASIS_STYLES[emphasis])


def _resolve(logger: logging.Logger | logging.LoggerAdapter | None):
    return access_logger if logger is None else logger


def pre_logger(
    request_id: int,
    request: Any,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    palette: Palette = DEFAULT_PALETTE,
) -> None:
    """Log the start of a request, plus its params on a second line when it has any."""
    log = _resolve(logger)
    view = RequestView.of(request)
    colorid = format_id(request_id, palette)

    log.info(
        f"[{colorid}] Starting {view.method} {view.target} "
        f"for {view.remote_addr or '-'} Headers {dict(view.headers)}"
    )
    if view.params is not None:
        log.info(f"[{colorid}]  \\ - - - -  Params: {view.params}")


def post_logger(
    request_id: int,
    request: Any,
    response: Any,
    elapsed_ms: Any,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    palette: Palette = DEFAULT_PALETTE,
) -> None:
    """
    Log a finished request with its duration and status.

    Sent at ERROR when the status is a number >= 500, otherwise at INFO.
    A status or duration that is not a number renders as "???" / "??" and the
    rest of the line is logged as usual.
    """
    log = _resolve(logger)
    view = RequestView.of(request)
    status = response_status(response)

    message = (
        f"[{format_id(request_id, palette)}] "
        f"Finished {view.method} {view.target} for {view.remote_addr or '-'} "
        f"in ({render_elapsed(elapsed_ms)} ms) Status: {render_status(status)}"
    )
    if is_error_status(status):
        log.error(message)
    else:
        log.info(message)


def exception_logger(
    request_id: int,
    request: Any,
    error: BaseException,
    elapsed_ms: Any,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    palette: Palette = DEFAULT_PALETTE,
) -> None:
    """
    Log a request whose handler raised.

    Two ERROR lines: an announcement with the remote address and duration, and
    a second one carrying the traceback (via exc_info) tagged with the same id.
    Only observes the error; raising it again is the interceptor's job.
    """
    log = _resolve(logger)
    view = RequestView.of(request)
    colorid = format_id(request_id, palette)
    elapsed = elapsed_ms if is_number(elapsed_ms) else ELAPSED_PLACEHOLDER

    log.error(
        f"[{colorid}] {style('Exception!', 'bright', 'red')} "
        f"for {view.remote_addr or '-'} in ({elapsed} ms)"
    )
    log.error(f"- End stacktrace for {colorid} -", exc_info=error)


def without_ansi(callback: Callable[..., None]) -> Callable[..., None]:
    """
    Wrap a colored callback so that everything it logs is ANSI-free.

    The wrapped callback still formats exactly as before; only the logger it
    writes to is swapped for an AnsiStrippingAdapter around it.
    """

    @functools.wraps(callback)
    def plain_callback(*args: Any, logger=None, **kwargs: Any) -> None:
        return callback(*args, logger=AnsiStrippingAdapter(_resolve(logger)), **kwargs)

    return plain_callback


plain_pre_logger = without_ansi(pre_logger)
plain_post_logger = without_ansi(post_logger)
plain_exception_logger = without_ansi(exception_logger)


class RequestLoggers(NamedTuple):
    pre: Callable[..., None]
    post: Callable[..., None]
    exception: Callable[..., None]


COLOR_LOGGERS = RequestLoggers(pre_logger, post_logger, exception_logger)
PLAIN_LOGGERS = RequestLoggers(plain_pre_logger, plain_post_logger, plain_exception_logger)


def build_loggers(
    *,
    plain: bool = False,
    palette: Palette = DEFAULT_PALETTE,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> RequestLoggers:
    """
    Return the callback triple bound to a palette and (optionally) a logger.

    The plain wrapper is applied before binding the logger so a custom logger
    is what ends up inside the stripping adapter.
    """
    callbacks = PLAIN_LOGGERS if plain else COLOR_LOGGERS
    return RequestLoggers(
        *(functools.partial(cb, palette=palette, logger=logger) for cb in callbacks)
    )


__all__ = [
    "ACCESS_LOGGER_NAME",
    "Emphasis",
    "EMPHASIS_STYLES",
    "classify_elapsed",
    "classify_status",
    "is_error_status",
    "render_elapsed",
    "render_status",
    "pre_logger",
    "post_logger",
    "exception_logger",
    "plain_pre_logger",
    "plain_post_logger",
    "plain_exception_logger",
    "without_ansi",
    "RequestLoggers",
    "COLOR_LOGGERS",
    "PLAIN_LOGGERS",
    "build_loggers",
]
