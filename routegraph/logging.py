"""Logging setup for routegraph.

Every module logs through a child of the ``routegraph`` logger, obtained with
``get_logger(__name__)``. The package logger owns a single stdout handler;
children carry none and inherit its level.

The initial level is INFO unless the ``ROUTEGRAPH_LOG_LEVEL`` environment
variable names another one (``DEBUG``, ``WARNING``, ... or a number). Path
algorithms log at DEBUG, analyses log one summary line at INFO.
"""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "routegraph"
LOG_LEVEL_ENV_VAR = "ROUTEGRAPH_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _level_from_env(default: int = logging.INFO) -> int:
    """Return the level named by ``ROUTEGRAPH_LOG_LEVEL``, or ``default``."""
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the package handler to the ``routegraph`` logger.

    Only the first call has an effect; use :func:`reset_logging` to start over.

    Args:
        level: Logging level. Defaults to ``ROUTEGRAPH_LOG_LEVEL`` or INFO.
        format_string: Record format. Defaults to ``DEFAULT_FORMAT``.
        handler: Handler to attach. Defaults to a stdout StreamHandler.
    """
    global _configured

    if _configured:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(_level_from_env() if level is None else level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Records still reach the Python root logger, where pytest's caplog listens.
    root_logger.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a routegraph module.

    Args:
        name: Logger name, normally ``__name__``.

    Returns:
        Logger without its own level, deferring to ``routegraph``.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the package logger and its handlers.

    Args:
        level: Numeric level or level name such as ``"DEBUG"``.
    """
    setup_root_logger()

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level name: {level!r}")
        level = resolved

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Show path-engine debug output (skipped links, enumeration counts)."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler and level so setup can run again."""
    global _configured
    _configured = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
