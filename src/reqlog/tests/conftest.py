"""
Core pytest configuration for the reqlog test suite.

Provides:
  - RecordingHandler: a logging.Handler that keeps the LogRecords it receives
  - access_log: records everything emitted on the "reqlog.access" logger
  - recording_logger: factory for isolated loggers with a RecordingHandler attached
  - make_request: factory for Ring-style request mappings
  - an autouse fixture that undoes whatever setup_logging() did during a test
"""

from __future__ import annotations

import logging

import pytest

from reqlog.config.settings import get_settings
from reqlog.core.logging.builder import ROOT_LOGGER_NAME, shutdown_logging
from reqlog.core.logging.callbacks import ACCESS_LOGGER_NAME


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.getMessage() for r in self.records]

    @property
    def levels(self) -> list[int]:
        return [r.levelno for r in self.records]


def _attach(name: str) -> tuple[logging.Logger, RecordingHandler, int]:
    logger = logging.getLogger(name)
    handler = RecordingHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger, handler, previous


@pytest.fixture
def access_log():
    """Capture records emitted on the access logger, independent of any dictConfig."""
    logger, handler, previous = _attach(ACCESS_LOGGER_NAME)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous)


@pytest.fixture
def recording_logger():
    """Return a factory: recording_logger(name) -> (logger, handler)."""
    attached = []

    def factory(name: str):
        logger, handler, previous = _attach(name)
        attached.append((logger, handler, previous))
        return logger, handler

    yield factory

    for logger, handler, previous in attached:
        logger.removeHandler(handler)
        logger.setLevel(previous)


@pytest.fixture
def make_request():
    """Return a factory for Ring-style request mappings with sensible defaults."""

    def factory(**overrides):
        request = {
            "request_method": "get",
            "uri": "/hello",
            "query_string": None,
            "remote_addr": "127.0.0.1",
            "headers": {"host": "localhost"},
            "params": None,
        }
        request.update(overrides)
        return request

    return factory


@pytest.fixture(autouse=True)
def reset_reqlog_logging():
    """Drop sinks/levels installed by setup_logging() and wrap calls so tests stay independent."""
    yield
    shutdown_logging()
    for name in (ROOT_LOGGER_NAME, ACCESS_LOGGER_NAME):
        logger = logging.getLogger(name)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
    get_settings.cache_clear()
