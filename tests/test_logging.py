"""Tests for namespaced logging helpers."""

import logging

import pytest

from md_parser import parse
from md_parser.utils.logger import ROOT_LOGGER_NAME, configure_logging, get_logger


class TestGetLogger:
    """Logger naming."""

    def test_prefixes_short_names(self) -> None:
        assert get_logger("parser").name == "md_parser.parser"

    def test_keeps_package_names(self) -> None:
        assert get_logger("md_parser.renderers.html").name == "md_parser.renderers.html"
        assert get_logger(ROOT_LOGGER_NAME).name == "md_parser"

    def test_does_not_match_similar_prefix(self) -> None:
        assert get_logger("md_parserx").name == "md_parser.md_parserx"


class TestConfigureLogging:
    """CLI logging setup."""

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG
        configure_logging(verbose=False)
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING

    def test_parser_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER_NAME):
            parse("# x\n")
        assert "Parsing document (4 chars)" in caplog.text
