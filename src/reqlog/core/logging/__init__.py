# src/reqlog/core/logging/
# ├─ __init__.py            # public API
# ├─ ansi.py                # style(), strip_ansi(), AnsiStrippingAdapter
# ├─ colors.py              # request ids, Palette, colorize(), format_id()
# ├─ views.py               # RequestView, response_status()
# ├─ callbacks.py           # pre/post/exception loggers + plain variants
# ├─ interceptor.py         # RequestInterceptor, wrap_with_logger()
# ├─ middleware.py          # FastAPI/Starlette RequestLoggerMiddleware
# ├─ builder.py             # make_dict_config(settings), attach_sink(), setup_logging(settings)
# ├─ handlers.py            # file / console handler entries for dictConfig
# ├─ formatters.py          # LineFormatter
# └─ filters.py             # RequestIdFilter (+ contextvar helpers)


from .builder import (
    attach_sink,
    detach_sink,
    make_dict_config,
    open_sink_logger,
    setup_logging,
    shutdown_logging,
    stop_queue_logging,
)
from .callbacks import (
    COLOR_LOGGERS,
    PLAIN_LOGGERS,
    RequestLoggers,
    build_loggers,
    exception_logger,
    plain_exception_logger,
    plain_post_logger,
    plain_pre_logger,
    post_logger,
    pre_logger,
    without_ansi,
)
from .colors import DEFAULT_PALETTE, ColorPair, Palette, colorize, format_id, format_id_plain, generate_id
from .filters import set_request_id, get_request_id, RequestIdFilter
from .interceptor import RequestInterceptor, make_logger_middleware, wrap_with_logger, wrap_with_plaintext_logger
from .middleware import RequestLoggerMiddleware

__all__ = [
    "setup_logging", "make_dict_config", "stop_queue_logging",
    "attach_sink", "detach_sink", "open_sink_logger", "shutdown_logging",
    "COLOR_LOGGERS", "PLAIN_LOGGERS", "RequestLoggers", "build_loggers",
    "pre_logger", "post_logger", "exception_logger",
    "plain_pre_logger", "plain_post_logger", "plain_exception_logger", "without_ansi",
    "DEFAULT_PALETTE", "ColorPair", "Palette", "colorize", "format_id", "format_id_plain", "generate_id",
    "set_request_id", "get_request_id", "RequestIdFilter",
    "RequestInterceptor", "make_logger_middleware", "wrap_with_logger", "wrap_with_plaintext_logger",
    "RequestLoggerMiddleware",
]
