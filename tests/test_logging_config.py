"""Tests for logging setup."""

import logging

import pytest

from catso.logging_config import BEHANCE_LOGGER, _resolve_level, configure_logging


def test_resolve_level() -> None:
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level("30") == 30
    assert _resolve_level("chatty") == logging.INFO


def test_behance_level_is_independent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("BEHANCE_LOG_LEVEL", "DEBUG")

    names = ("catso", BEHANCE_LOGGER, "uvicorn.access")
    previous = {name: logging.getLogger(name).level for name in names}
    try:
        configure_logging()

        assert logging.getLogger("catso").level == logging.WARNING
        assert logging.getLogger(BEHANCE_LOGGER).level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
    finally:
        for name, level in previous.items():
            logging.getLogger(name).setLevel(level)
