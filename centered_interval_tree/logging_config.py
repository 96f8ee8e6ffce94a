"""
Logging configuration for centered-interval-tree.

Library modules log through children of the ``centered_interval_tree`` logger.
The package installs one console handler of its own, recognised by name, so
that reconfiguring (for example ``interval-tree-query --debug``) replaces that
handler and leaves handlers attached by the application or a test runner alone.

Usage:
    from .logging_config import get_logger
    logger = get_logger(__name__)
    logger.debug("Picked mid ...")
"""

import logging
import sys
from typing import IO, Optional


PACKAGE_LOGGER = "centered_interval_tree"
CONSOLE_HANDLER = f"{PACKAGE_LOGGER}.console"

# DEBUG output interleaves construction and query logs from several modules
DEBUG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def console_handler(logger: Optional[logging.Logger] = None) -> Optional[logging.Handler]:
    """Return the package's own console handler, or None before setup."""
    logger = logger or logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers:
        if handler.get_name() == CONSOLE_HANDLER:
            return handler
    return None


def setup_logging(level: int = logging.INFO, force: bool = False,
                  stream: Optional[IO[str]] = None) -> None:
    """
    Install the console handler on the package logger.

    Args:
        level: Logging level (default: INFO). DEBUG also prefixes records
            with level and module name.
        force: Replace an existing console handler instead of keeping it
        stream: Where to write (default: sys.stdout)
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    existing = console_handler(package_logger)
    if existing is not None:
        if not force:
            return
        package_logger.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.set_name(CONSOLE_HANDLER)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if level <= logging.DEBUG else "%(message)s"))

    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the package logger, setting up the console on first use.

    Args:
        name: Module name (typically __name__); bare names get the package prefix
    """
    setup_logging()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
