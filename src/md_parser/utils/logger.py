"""Logging helpers for md_parser.

The library only creates namespaced loggers; handlers and levels are left
to the application (the CLI configures them with --verbose).

Example:
    >>> from md_parser.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "md_parser"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the "md_parser." namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("renderers.html").name
        'md_parser.renderers.html'
        >>> get_logger("md_parser.parser").name
        'md_parser.parser'
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for command-line use.

    Args:
        verbose: Log md_parser debug messages instead of warnings only
    """
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
