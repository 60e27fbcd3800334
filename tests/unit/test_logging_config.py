"""Unit tests for src/infrastructure/logging_config.py."""

import logging

import pytest

from src.infrastructure.config import Settings
from src.infrastructure.logging_config import LOG_FORMAT, setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    app = logging.getLogger("src")
    saved = (root.level, list(root.handlers), app.level, list(app.handlers), app.propagate)
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    app.setLevel(saved[2])
    app.handlers[:] = saved[3]
    app.propagate = saved[4]


def test_setup_logging_applies_level_from_settings():
    setup_logging(Settings(log_level="debug"))
    assert logging.getLogger("src").level == logging.DEBUG


def test_setup_logging_installs_console_handler_with_format():
    setup_logging(Settings(log_level="INFO"))
    handlers = logging.getLogger("src").handlers
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == LOG_FORMAT


def test_module_loggers_inherit_package_level():
    setup_logging(Settings(log_level="WARNING"))
    logger = logging.getLogger("src.infrastructure.persistence.unit_of_work")
    assert logger.getEffectiveLevel() == logging.WARNING
