"""Utility modules for md_parser.

Provides:
- logger: get_logger, configure_logging
"""

from md_parser.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
