"""Tests for build logging and the opt-in logging setup."""

from __future__ import annotations

import io
import logging

import pytest

import polysphere.polyhedron as polyhedron_mod
from polysphere.errors import InvariantViolationError
from polysphere.logging_config import setup_logging
from polysphere.polyhedron import build_polyhedron


@pytest.fixture
def package_logger():
    logger = logging.getLogger("polysphere")
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_build_logs_debug_summary(caplog):
    caplog.set_level(logging.DEBUG, logger="polysphere")
    build_polyhedron(1)
    messages = [r.getMessage() for r in caplog.records]
    assert any("built 42 tiles" in m for m in messages)
    assert any(m.startswith("subdivided 20 faces") for m in messages)


def test_failed_build_logged_and_raised(caplog, monkeypatch):
    def _broken(*args, **kwargs):
        raise InvariantViolationError("faces share the same angle", 3)

    monkeypatch.setattr(polyhedron_mod, "build_tiles", _broken)
    with pytest.raises(InvariantViolationError):
        build_polyhedron(1)
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].name == "polysphere.polyhedron"
    assert errors[0].exc_info is not None


def test_setup_logging_console(package_logger, capsys):
    logger = setup_logging(logging.INFO)
    assert logger is package_logger
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    logging.getLogger("polysphere.test").info("hello tiles")
    assert "polysphere.test - INFO - hello tiles" in capsys.readouterr().out


def test_setup_logging_idempotent(package_logger):
    setup_logging()
    setup_logging()
    assert len(package_logger.handlers) == 1


def test_setup_logging_stream(package_logger):
    stream = io.StringIO()
    setup_logging(logging.DEBUG, stream=stream)
    build_polyhedron(0)
    assert "polysphere.polyhedron - DEBUG - built 12 tiles" in stream.getvalue()


def test_setup_logging_level_filters(package_logger):
    stream = io.StringIO()
    setup_logging(logging.WARNING, stream=stream)
    build_polyhedron(0)
    assert stream.getvalue() == ""
