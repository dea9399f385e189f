# src/reqlog/tests/test_logging/test_views.py
from types import SimpleNamespace

from starlette.requests import Request
from starlette.responses import Response

from reqlog.core.logging.views import RequestView, response_status


def make_scope(**overrides):
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "server": ("example.org", 80),
        "root_path": "",
        "path": "/items",
        "query_string": b"q=1&page=2",
        "headers": [(b"host", b"example.org"), (b"user-agent", b"pytest")],
        "client": ("10.0.0.1", 51234),
    }
    scope.update(overrides)
    return scope


def test_view_from_ring_style_mapping(make_request):
    view = RequestView.of(make_request(query_string="x=1", params={"x": "1"}))
    assert view.method == "GET"
    assert view.uri == "/hello"
    assert view.query_string == "x=1"
    assert view.target == "/hello?x=1"
    assert view.remote_addr == "127.0.0.1"
    assert view.headers == {"host": "localhost"}
    assert view.params == {"x": "1"}


def test_view_omits_missing_or_empty_query_string(make_request):
    assert RequestView.of(make_request()).target == "/hello"
    assert RequestView.of(make_request(query_string="")).target == "/hello"


def test_view_accepts_aliases_and_attribute_objects():
    view = RequestView.of(SimpleNamespace(method="post", path="/p", query="a=b"))
    assert view.method == "POST"
    assert view.target == "/p?a=b"
    assert view.remote_addr is None
    assert view.headers == {}
    assert view.params is None


def test_view_of_view_is_identity():
    view = RequestView(method="GET", uri="/")
    assert RequestView.of(view) is view


def test_view_from_starlette_request():
    view = RequestView.of(Request(make_scope()))
    assert view.method == "GET"
    assert view.uri == "/items"
    assert view.query_string == "q=1&page=2"
    assert view.remote_addr == "10.0.0.1"
    assert view.headers == {"host": "example.org", "user-agent": "pytest"}
    assert view.params == {"q": "1", "page": "2"}


def test_view_from_starlette_request_without_query_or_client():
    view = RequestView.of(Request(make_scope(query_string=b"", client=None)))
    assert view.query_string is None
    assert view.params is None
    assert view.remote_addr is None
    assert view.target == "/items"


def test_response_status_lookup():
    assert response_status({"status": 200}) == 200
    assert response_status({"status_code": 201}) == 201
    assert response_status(SimpleNamespace(status_code=404)) == 404
    assert response_status(SimpleNamespace(status=302)) == 302
    assert response_status(Response(status_code=503)) == 503
    assert response_status({"body": "no status"}) is None
    assert response_status(None) is None
