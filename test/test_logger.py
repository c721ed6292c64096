#!/usr/bin/env python3
"""Tests for the structured logger implementations."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from namecast.logger import ConsoleLogger, DefaultLogger


def test_default_logger_propagates_fields(caplog):
    logger = DefaultLogger("namecast.test")

    with caplog.at_level(logging.INFO, logger="namecast.test"):
        logger.info("Names extracted", kind="pdf", count=3)
        logger.debug("hidden")

    assert caplog.messages == ["Names extracted kind=pdf count=3"]


def test_default_logger_without_fields(caplog):
    logger = DefaultLogger("namecast.test")

    with caplog.at_level(logging.WARNING, logger="namecast.test"):
        logger.warning("Session busy")

    assert caplog.records[0].getMessage() == "Session busy"
    assert caplog.records[0].levelno == logging.WARNING


def test_console_logger_writes_to_stderr(capsys):
    logger = ConsoleLogger(name="namecast.console_test", level=logging.DEBUG)

    logger.error("Archive build failed", error_type="OSError")

    err = capsys.readouterr().err
    assert "[ERROR] namecast.console_test: Archive build failed error_type=OSError" in err
