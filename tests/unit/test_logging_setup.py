"""Unit tests for sdkkernel.logging_setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.console import Console
from rich.logging import RichHandler

from sdkkernel.config import KernelConfig
from sdkkernel.logging_setup import HTTP_LOGGER_NAME, LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def _reset_sdkkernel_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def _flush() -> None:
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()


class TestSetupLogging:
    """setup_logging maps KernelConfig logging settings onto handlers."""

    def test_returns_http_child_logger(self) -> None:
        logger = setup_logging()
        assert logger.name == HTTP_LOGGER_NAME == "sdkkernel.http"

    def test_level_from_config(self) -> None:
        setup_logging(KernelConfig(log_level="debug"))
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_default_level_is_info(self) -> None:
        setup_logging()
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging(KernelConfig(log_level="chatty"))
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_rich_handler_only_without_log_file(self) -> None:
        setup_logging()
        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)

    def test_repeated_calls_replace_handlers(self) -> None:
        setup_logging()
        setup_logging()
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    def test_log_file_from_config(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "sdk.log"
        logger = setup_logging(KernelConfig(log_level="DEBUG", log_file=log_file))

        logger.debug("GET /items 200")
        _flush()

        line = log_file.read_text().strip()
        assert line.endswith("sdkkernel.http: GET /items 200")
        assert "DEBUG" in line

    def test_debug_entries_dropped_at_info(self, tmp_path: Path) -> None:
        log_file = tmp_path / "sdk.log"
        logger = setup_logging(KernelConfig(log_file=log_file))

        logger.debug("hidden")
        logger.info("shown")
        _flush()

        text = log_file.read_text()
        assert "hidden" not in text
        assert "shown" in text

    def test_console_renders_brackets_verbatim(self) -> None:
        console = Console(record=True, width=200)
        logger = setup_logging(console=console)
        logger.info("GET /items [page=1]")
        assert "GET /items [page=1]" in console.export_text()
