# src/reqlog/tests/test_logging/test_middleware_integration.py
import logging

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.testclient import TestClient

from reqlog.config.settings import Settings
from reqlog.core.logging.filters import get_request_id
from reqlog.core.logging.middleware import RequestLoggerMiddleware
from reqlog.exceptions import ConfigurationError


@pytest.fixture
def seen_ids():
    return []


@pytest.fixture
def app(seen_ids):
    app = FastAPI()
    app.add_middleware(RequestLoggerMiddleware, plain=True, settings=Settings(_env_file=None))

    @app.get("/hello")
    async def hello():
        seen_ids.append(get_request_id())
        logging.getLogger("app.hello").info("handling hello")
        return {"ok": True}

    @app.get("/unavailable")
    async def unavailable():
        return JSONResponse({"detail": "down"}, status_code=503)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


def test_successful_request_logs_start_params_and_finish(app, access_log, seen_ids):
    client = TestClient(app)
    resp = client.get("/hello?name=x")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    messages = access_log.messages
    assert len(messages) == 3
    start, params, finish = messages

    request_id = start[1:5]
    assert seen_ids == [request_id]
    assert start.startswith(f"[{request_id}] Starting GET /hello?name=x for testclient Headers ")
    assert params == f"[{request_id}]  \\ - - - -  Params: {{'name': 'x'}}"
    assert finish.startswith(f"[{request_id}] Finished GET /hello?name=x for testclient in (")
    assert finish.endswith("Status: 200")
    assert access_log.levels == [logging.INFO] * 3


def test_request_without_query_logs_single_start_line(app, access_log):
    TestClient(app).get("/hello")

    start, finish = access_log.messages
    assert "Starting GET /hello for testclient" in start
    assert "Finished GET /hello for testclient" in finish


def test_server_error_status_is_logged_at_error(app, access_log):
    resp = TestClient(app).get("/unavailable")
    assert resp.status_code == 503

    assert access_log.levels == [logging.INFO, logging.ERROR]
    assert access_log.messages[-1].endswith("Status: 503")


def test_handler_exception_is_logged_and_propagates(app, access_log):
    client = TestClient(app)

    with pytest.raises(RuntimeError, match="kaboom"):
        client.get("/boom")

    assert access_log.levels == [logging.INFO, logging.ERROR, logging.ERROR]
    start, announce, trace = access_log.records
    request_id = start.getMessage()[1:5]
    assert announce.getMessage().startswith(f"[{request_id}] Exception! for testclient in (")
    assert trace.getMessage() == f"- End stacktrace for {request_id} -"
    assert isinstance(trace.exc_info[1], RuntimeError)
    assert not any("Finished" in m for m in access_log.messages)


def test_unhandled_exception_becomes_500_downstream(app, access_log):
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/boom")

    assert resp.status_code == 500
    assert [r.levelno for r in access_log.records] == [logging.INFO, logging.ERROR, logging.ERROR]


def test_colored_middleware_decorates_ids(access_log):
    app = FastAPI()
    app.add_middleware(RequestLoggerMiddleware, settings=Settings(_env_file=None, LOG_COLOR=True))

    @app.get("/")
    async def index():
        return {"ok": True}

    TestClient(app).get("/")

    assert all(m.startswith("[\033[1;") for m in access_log.messages)


def test_middleware_rejects_degenerate_palette_at_construction():
    with pytest.raises(ConfigurationError) as excinfo:
        RequestLoggerMiddleware(FastAPI(), settings=Settings(_env_file=None, LOG_PALETTE="red"))
    assert excinfo.value.field == "LOG_PALETTE"
