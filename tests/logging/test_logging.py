"""Test the centralized logging functionality."""

import logging
from io import StringIO

import pytest

from ekflow.logging import (
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


@pytest.fixture(autouse=True)
def _restore_info_level():
    set_global_log_level(logging.INFO)
    yield
    set_global_log_level(logging.INFO)


def test_centralized_logging():
    """Test that centralized logging works properly."""
    logger = get_logger("ekflow.test")

    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(handler)

    try:
        # Test info level (should appear by default)
        logger.info("Test info message")
        assert "Test info message" in log_capture.getvalue()

        # Test debug level (should not appear by default)
        log_capture.seek(0)
        log_capture.truncate(0)
        logger.debug("Test debug message")
        assert "Test debug message" not in log_capture.getvalue()

        enable_debug_logging()
        logger.debug("Test debug message after enable")
        assert "Test debug message after enable" in log_capture.getvalue()

        disable_debug_logging()
        logger.debug("Test debug message after disable")
        assert "Test debug message after disable" not in log_capture.getvalue()
    finally:
        logger.removeHandler(handler)


def test_logger_naming():
    logger = get_logger("ekflow.algorithms.test")
    assert logger.name == "ekflow.algorithms.test"
    assert logger.level == logging.NOTSET


def test_multiple_loggers():
    """Test that multiple loggers can be created and configured."""
    logger1 = get_logger("ekflow.module1")
    logger2 = get_logger("ekflow.module2")
    assert logger1 is not logger2

    set_global_log_level(logging.WARNING)
    root_logger = logging.getLogger("ekflow")
    assert root_logger.level == logging.WARNING

    # Child loggers inherit from root (effective level)
    assert logger1.getEffectiveLevel() == logging.WARNING
    assert logger2.getEffectiveLevel() == logging.WARNING


def test_setup_is_idempotent_until_reset():
    root_logger = logging.getLogger("ekflow")
    original = list(root_logger.handlers)

    custom = logging.StreamHandler(StringIO())
    setup_root_logger(handler=custom)
    assert root_logger.handlers == original

    try:
        reset_logging()
        assert root_logger.handlers == []
        setup_root_logger(level=logging.DEBUG, handler=custom)
        assert root_logger.handlers == [custom]
        assert root_logger.level == logging.DEBUG
    finally:
        reset_logging()
        setup_root_logger()


def test_records_propagate_to_caplog(caplog):
    with caplog.at_level(logging.INFO, logger="ekflow"):
        get_logger("ekflow.propagation").info("visible to pytest")
    assert "visible to pytest" in caplog.text
