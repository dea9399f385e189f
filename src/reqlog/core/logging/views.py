# src/reqlog/core/logging/views.py
"""
Normalised, read-only views over whatever request/response values the hosting
server hands us.

The log callbacks only need a handful of fields (method, uri, query string,
remote address, headers, params on the way in; status on the way out). Hosts
differ in how they expose them, so the callbacks go through `RequestView.of()`
and `response_status()` instead of reaching into request objects directly.

Accepted request shapes:
  - RequestView (returned as-is)
  - starlette.requests.Request (and therefore FastAPI's Request)
  - Ring-style mappings: {"request_method": "get", "uri": "/x", "query_string": ...}
    ("method", "path" and "query" are accepted as aliases)
  - any object exposing those names as attributes
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from starlette.requests import Request

_MISSING = object()

# (canonical key, aliases) in lookup order
_REQUEST_KEYS: dict[str, tuple[str, ...]] = {
    "method": ("request_method", "method"),
    "uri": ("uri", "path"),
    "query_string": ("query_string", "query"),
    "remote_addr": ("remote_addr",),
    "headers": ("headers",),
    "params": ("params",),
}


def _lookup(source: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        if isinstance(source, Mapping):
            value = source.get(name, _MISSING)
        else:
            value = getattr(source, name, _MISSING)
        if value is not _MISSING:
            return value
    return None


@dataclass(frozen=True)
class RequestView:
    method: str = "-"
    uri: str = "/"
    query_string: str | None = None
    remote_addr: str | None = None
    headers: Mapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] | None = None

    @classmethod
    def from_request(cls, request: Request) -> "RequestView":
        """Build a view from a Starlette/FastAPI request."""
        query_params = dict(request.query_params)
        return cls(
            method=request.method.upper(),
            uri=request.url.path,
            query_string=request.url.query or None,
            remote_addr=request.client.host if request.client else None,
            headers=dict(request.headers),
            params=query_params or None,
        )

    @classmethod
    def from_mapping(cls, source: Any) -> "RequestView":
        """Build a view from a Ring-style mapping or an attribute-bearing object."""
        values = {key: _lookup(source, names) for key, names in _REQUEST_KEYS.items()}
        method = values["method"]
        headers = values["headers"]
        return cls(
            method=str(method).upper() if method is not None else "-",
            uri=str(values["uri"]) if values["uri"] is not None else "/",
            query_string=values["query_string"] or None,
            remote_addr=values["remote_addr"],
            headers=dict(headers) if headers is not None else {},
            params=values["params"],
        )

    @classmethod
    def of(cls, request: Any) -> "RequestView":
        if isinstance(request, RequestView):
            return request
        if isinstance(request, Request):
            return cls.from_request(request)
        return cls.from_mapping(request)

    @property
    def target(self) -> str:
        """uri with the query string appended only when there is one."""
        if self.query_string:
            return f"{self.uri}?{self.query_string}"
        return self.uri


def response_status(response: Any) -> Any:
    """
    Return the status carried by `response`, or None.

    Looks at mapping keys "status"/"status_code" first, then attributes
    `status_code`/`status`. The value is returned as found; deciding whether it
    is usable as a number is the caller's job.
    """
    if isinstance(response, Mapping):
        return _lookup(response, ("status", "status_code"))
    return _lookup(response, ("status_code", "status"))


__all__ = ["RequestView", "response_status"]
