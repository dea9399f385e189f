# src/reqlog/core/logging/middleware.py
"""
Request logging middleware for FastAPI / Starlette.

Runs every HTTP request through a RequestInterceptor, so each request gets a
Starting line, then either a Finished line or an Exception! pair, all tagged
with the same colorized id.

Integration notes
-----------------
- Configure the sink once at startup, before serving:
      setup_logging(settings)
      app.add_middleware(RequestLoggerMiddleware)
- Pass `plain=True` for log files read outside a terminal; the default
  follows Settings.LOG_COLOR.
- Handler exceptions are logged and then propagate unchanged, so Starlette's
  ServerErrorMiddleware / exception handlers still produce the client response.
  Responses produced by an exception handler registered *inside* this
  middleware are logged as ordinary Finished lines.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from reqlog.config.settings import Settings, get_settings

from .callbacks import RequestLoggers, build_loggers
from .colors import Palette
from .interceptor import RequestInterceptor


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware that logs the lifecycle of every request.

    Args:
        app: the wrapped ASGI app (supplied by add_middleware)
        plain: log without ANSI colour codes; None means "not Settings.LOG_COLOR"
        loggers: custom (pre, post, exception) callbacks; overrides `plain`
        settings: Settings to read LOG_COLOR / LOG_PALETTE from (default: get_settings())
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        plain: bool | None = None,
        loggers: RequestLoggers | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(app)
        if loggers is None:
            settings = settings or get_settings()
            if plain is None:
                plain = not settings.LOG_COLOR
            loggers = build_loggers(plain=plain, palette=Palette(settings.palette_colors))
        self.interceptor = RequestInterceptor(loggers)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        return await self.interceptor.run_async(call_next, request)


__all__ = ["RequestLoggerMiddleware"]
