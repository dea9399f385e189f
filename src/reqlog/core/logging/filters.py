# src/reqlog/core/logging/filters.py
"""
Logging filters

Request ID filter and helpers for logging.

While a request runs through the interceptor, its hex id is stored in a
`contextvars.ContextVar`. Any log record that passes through RequestIdFilter
gets that id as `record.request_id`, so application code logging from inside
a handler can be correlated with the access log's Starting/Finished lines
without passing the id around.

- ContextVar (not threading.local) so the value follows asyncio tasks across
  awaits as well as plain threads.
- `request_id` defaults to "-" so a format string referencing
  `%(request_id)s` never raises KeyError outside a request.
- The filter only annotates; it always returns True.

Usage (dictConfig):
     "filters": {"request_id": {"()": RequestIdFilter}},
     "handlers": {"file": {..., "filters": ["request_id"]}}
"""

import logging
from logging import LogRecord
import contextvars

# contextvar for the current request's formatted id, set by the interceptor.
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    """
    Reset the contextvar to the previously saved token returned by set_request_id().
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    """
    Retrieve the current context's request id, or None outside a request.
    """
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has a `request_id` attribute.

    Order of precedence:
      * record.request_id, if already set via extra={"request_id": ...}
      * the contextvar value set by the interceptor
      * the sentinel "-"
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


__all__ = ["set_request_id", "reset_request_id", "get_request_id", "RequestIdFilter"]
