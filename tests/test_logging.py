"""Tests for cmdletdoc.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cmdletdoc.logging import configure_logging, get_logger, log_warning_group


def test_get_logger_nests_under_cmdletdoc() -> None:
    assert get_logger().name == "cmdletdoc"
    assert get_logger("engine").name == "cmdletdoc.engine"


def test_configure_logging_replaces_handlers_and_writes_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"

    configure_logging()
    logger = configure_logging(verbose=True, log_file=log_file)
    get_logger("engine").debug("Found cmdlet %s", "Test-Sample")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    assert "DEBUG cmdletdoc.engine: Found cmdlet Test-Sample" in log_file.read_text(encoding="utf-8")


def test_warning_group_layout(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="cmdletdoc")

    log_warning_group(get_logger("engine"), "things.GetThing", ["First.", "Second."])

    assert [record.getMessage() for record in caplog.records] == [
        "Warning: things.GetThing",
        "    First.",
        "    Second.",
    ]
