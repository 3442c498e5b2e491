"""Test the centralized logging functionality."""

import logging
from io import StringIO

import pytest

from routegraph.logging import (
    LOG_LEVEL_ENV_VAR,
    ROOT_LOGGER_NAME,
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


def test_centralized_logging():
    """Debug output is hidden by default and shown once enabled."""
    logger = get_logger("routegraph.test")

    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)

    logger.handlers.clear()
    logger.addHandler(handler)

    try:
        logger.info("Test info message")
        assert "Test info message" in log_capture.getvalue()

        log_capture.seek(0)
        log_capture.truncate(0)
        logger.debug("Test debug message")
        assert "Test debug message" not in log_capture.getvalue()

        enable_debug_logging()
        logger.debug("Test debug message after enable")
        assert "Test debug message after enable" in log_capture.getvalue()
    finally:
        logger.removeHandler(handler)
        disable_debug_logging()


def test_logger_naming():
    logger = get_logger("routegraph.analysis.test")
    assert logger.name == "routegraph.analysis.test"


def test_multiple_loggers():
    """Child loggers inherit the level set on the package root."""
    logger1 = get_logger("routegraph.module1")
    logger2 = get_logger("routegraph.module2")

    assert logger1 is not logger2

    try:
        set_global_log_level(logging.WARNING)
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert root_logger.level == logging.WARNING
        assert logger1.getEffectiveLevel() == logging.WARNING
        assert logger2.getEffectiveLevel() == logging.WARNING
    finally:
        disable_debug_logging()


def test_reset_and_custom_handler():
    """After a reset the root logger can be configured with a custom handler."""
    capture = StringIO()
    try:
        reset_logging()
        setup_root_logger(
            level=logging.DEBUG,
            format_string="%(levelname)s:%(message)s",
            handler=logging.StreamHandler(capture),
        )
        # A second call is a no-op and must not add a handler.
        setup_root_logger()
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert len(root_logger.handlers) == 1

        get_logger("routegraph.reset").debug("after reset")
        assert "DEBUG:after reset" in capture.getvalue()
    finally:
        reset_logging()
        setup_root_logger()


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warning")
    try:
        reset_logging()
        setup_root_logger()
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
    finally:
        monkeypatch.delenv(LOG_LEVEL_ENV_VAR)
        reset_logging()
        setup_root_logger()
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO


def test_unknown_environment_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "chatty")
    try:
        reset_logging()
        setup_root_logger()
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO
    finally:
        monkeypatch.delenv(LOG_LEVEL_ENV_VAR)
        reset_logging()
        setup_root_logger()


def test_set_level_by_name():
    try:
        set_global_log_level("debug")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG
        with pytest.raises(ValueError):
            set_global_log_level("chatty")
    finally:
        disable_debug_logging()


def test_default_format():
    handler = logging.getLogger(ROOT_LOGGER_NAME).handlers[0]
    record = logging.LogRecord(
        "routegraph.algorithms.spf", logging.INFO, __file__, 1, "settled", None, None
    )
    assert handler.format(record).endswith("[INFO] routegraph.algorithms.spf: settled")
