"""Logging setup for exhaustigen.

Every module logs through `get_logger(__name__)`, so all records hang off the
package root logger ``exhaustigen``. The root defaults to WARNING: inside a
test suite only truncated enumerations are reported, while run start/finish
(INFO) and progress (DEBUG) records stay quiet until an enumeration asks for
them through `EnumerationConfig.log_level`.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "exhaustigen"

#: Level of the root logger when nothing else has been requested.
DEFAULT_LEVEL = logging.WARNING

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = DEFAULT_LEVEL,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install a single handler on the ``exhaustigen`` root logger.

    Repeated calls are no-ops until `reset_logging` runs.

    Args:
        level: Root level (default: WARNING).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stderr StreamHandler
            so run reports do not mix with the test's own stdout).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Let records reach pytest's caplog handler on the global root
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger that inherits the ``exhaustigen`` root settings.

    Args:
        name: Logger name (typically __name__ from calling module).
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)  # Inherit from parent
    return logger


def set_level(level: int) -> int:
    """Set the ``exhaustigen`` root level and return the previous one.

    Used by `exhaustigen.runner.exhaust` to apply `EnumerationConfig.log_level`
    for the duration of one enumeration.
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    previous = root_logger.level
    root_logger.setLevel(level)
    return previous


def reset_logging() -> None:
    """Drop the root handler and level so the next setup starts clean (tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
