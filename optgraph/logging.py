"""Package-wide logging for optgraph.

Every module logs through ``get_logger(__name__)``. Records flow to the
``optgraph`` logger, which owns the only handler; child loggers carry no
level of their own. The handler writes to stderr because stdout carries
command output (e.g. ``optgraph solve --json``).
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "optgraph"

#: Default record layout of the package handler.
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _package_logger() -> logging.Logger:
    return logging.getLogger(PACKAGE_LOGGER)


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the single handler of the ``optgraph`` logger.

    Only the first call after import (or after `reset_logging`) has an
    effect.

    Args:
        level: Level of the package logger.
        format_string: Record format; `LOG_FORMAT` if omitted.
        handler: Handler to install; a stderr `StreamHandler` if omitted.
    """
    global _configured
    if _configured:
        return

    package = _package_logger()
    package.handlers.clear()
    package.setLevel(level)

    target = handler if handler is not None else logging.StreamHandler(sys.stderr)
    target.setFormatter(logging.Formatter(format_string or LOG_FORMAT))
    package.addHandler(target)
    # pytest's caplog listens on the Python root logger
    package.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, configuring the package on first use.

    Args:
        name: Dotted module name, normally ``__name__``.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Apply ``level`` to the package logger and its handlers."""
    setup_root_logger()
    package = _package_logger()
    package.setLevel(level)
    for handler in package.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to the default INFO level."""
    set_global_log_level(logging.INFO)


def configure_cli_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Pick the level for a command-line run.

    ``verbose`` wins over ``quiet``: DEBUG, then WARNING, INFO otherwise.
    """
    if verbose:
        enable_debug_logging()
    elif quiet:
        set_global_log_level(logging.WARNING)
    else:
        disable_debug_logging()


def reset_logging() -> None:
    """Drop the package handler so the next setup starts from scratch.

    Used by tests that install their own handlers.
    """
    global _configured
    _configured = False
    package = _package_logger()
    package.handlers.clear()
    package.setLevel(logging.NOTSET)
