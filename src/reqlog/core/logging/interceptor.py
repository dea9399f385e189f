# src/reqlog/core/logging/interceptor.py
"""
Request interceptor: the control flow around a wrapped handler.

Per request:
  1. draw a request id, take a monotonic start time
  2. pre-logger(id, request)
  3. handler(request)
       - returned: post-logger(id, request, response, elapsed_ms), return response as-is
       - raised:   exception-logger(id, request, error, elapsed_ms), then re-raise
                   the same error object

Exactly one of post-logger / exception-logger runs. The interceptor never turns
an error into a response, never retries, and holds no state between requests:
it is safe to share between threads and tasks without locking.

Only the handler call is guarded. A failure inside a logger callback is not
reported through the exception-logger.
"""

import functools
import inspect
import time
from pathlib import Path
from typing import Any, Awaitable, Callable

from reqlog.config.settings import Settings, get_settings

from .builder import open_sink_logger
from .callbacks import RequestLoggers, build_loggers
from .colors import Palette, format_id_plain, generate_id
from .filters import reset_request_id, set_request_id

Handler = Callable[[Any], Any]
AsyncHandler = Callable[[Any], Awaitable[Any]]


class RequestInterceptor:
    """
    Runs handlers between the three log callbacks of a RequestLoggers triple.

    Args:
        loggers: the (pre, post, exception) callbacks
        id_generator: returns a fresh request id per call (default: random 0..0xffff)
        clock: monotonic clock in seconds (default: time.perf_counter)
    """

    def __init__(
        self,
        loggers: RequestLoggers,
        *,
        id_generator: Callable[[], int] = generate_id,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.loggers = loggers
        self.id_generator = id_generator
        self.clock = clock

    def _elapsed_ms(self, start: float) -> int:
        return int((self.clock() - start) * 1000)

    def run(self, handler: Handler, request: Any) -> Any:
        """Run a synchronous handler for one request."""
        request_id = self.id_generator()
        start = self.clock()
        token = set_request_id(format_id_plain(request_id))
        try:
            self.loggers.pre(request_id, request)
            try:
                response = handler(request)
            except BaseException as error:
                self.loggers.exception(request_id, request, error, self._elapsed_ms(start))
                raise
            self.loggers.post(request_id, request, response, self._elapsed_ms(start))
            return response
        finally:
            reset_request_id(token)

    async def run_async(self, handler: AsyncHandler, request: Any) -> Any:
        """Run a coroutine handler for one request; same contract as run()."""
        request_id = self.id_generator()
        start = self.clock()
        token = set_request_id(format_id_plain(request_id))
        try:
            self.loggers.pre(request_id, request)
            try:
                response = await handler(request)
            except BaseException as error:
                self.loggers.exception(request_id, request, error, self._elapsed_ms(start))
                raise
            self.loggers.post(request_id, request, response, self._elapsed_ms(start))
            return response
        finally:
            reset_request_id(token)


def _is_async_handler(handler: Any) -> bool:
    """True for coroutine functions and for objects whose __call__ is one."""
    if inspect.iscoroutinefunction(handler):
        return True
    return inspect.iscoroutinefunction(getattr(type(handler), "__call__", None))


def make_logger_middleware(
    handler: Handler | AsyncHandler,
    pre_logger: Callable[..., None],
    post_logger: Callable[..., None],
    exception_logger: Callable[..., None],
    **interceptor_kwargs: Any,
) -> Handler | AsyncHandler:
    """
    Wrap `handler` with the given logger callbacks.

    wrap_with_logger() / wrap_with_plaintext_logger() call this with the
    prepackaged callbacks; call it directly to supply your own. The returned
    wrapper is a coroutine function when `handler` is one, or is an object
    with an `async def __call__`.

    Extra keyword arguments (id_generator, clock) go to RequestInterceptor.
    """
    interceptor = RequestInterceptor(
        RequestLoggers(pre_logger, post_logger, exception_logger), **interceptor_kwargs
    )

    if _is_async_handler(handler):
        @functools.wraps(handler)
        async def async_wrapper(request: Any) -> Any:
            return await interceptor.run_async(handler, request)

        return async_wrapper

    @functools.wraps(handler)
    def wrapper(request: Any) -> Any:
        return interceptor.run(handler, request)

    return wrapper


def _wrap(handler, log_file, log_level, settings: Settings | None, plain: bool):
    settings = settings or get_settings()
    overrides = {}
    if log_file is not None:
        overrides["LOG_FILE"] = Path(log_file)
    if log_level is not None:
        overrides["LOG_LEVEL"] = log_level
    if overrides:
        # overrides get the same normalisation as env values
        settings = type(settings).model_validate({**settings.model_dump(), **overrides})
    # palette first: a bad LOG_PALETTE must fail before the sink is touched
    palette = Palette(settings.palette_colors)
    loggers = build_loggers(plain=plain, palette=palette, logger=open_sink_logger(settings))
    return make_logger_middleware(handler, loggers.pre, loggers.post, loggers.exception)


def wrap_with_logger(handler, log_file=None, *, log_level: str | None = None, settings: Settings | None = None):
    """
    Return `handler` wrapped with the ANSI-colored request loggers.

    Opens a log sink for this handler alone, from `settings` (default:
    get_settings()), with `log_file` / `log_level` overriding LOG_FILE /
    LOG_LEVEL when given. Other wrapped handlers keep their own destinations.
    """
    return _wrap(handler, log_file, log_level, settings, plain=False)


def wrap_with_plaintext_logger(handler, log_file=None, *, log_level: str | None = None, settings: Settings | None = None):
    """Like wrap_with_logger, but the log lines carry no ANSI codes."""
    return _wrap(handler, log_file, log_level, settings, plain=True)


__all__ = [
    "RequestInterceptor",
    "make_logger_middleware",
    "wrap_with_logger",
    "wrap_with_plaintext_logger",
]
