"""Unit tests for logging setup."""

import logging
import sys

import pytest
from loguru import logger as loguru_logger

from flowloc.utils.logger import InterceptHandler, LoguruWrapper, setup_logger, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    loguru_logger.remove()
    loguru_logger.add(sys.stderr)
    std_logger = logging.getLogger("flowloc")
    std_logger.handlers = []
    std_logger.propagate = True


def test_stdlib_records_routed_to_loguru():
    messages = []
    setup_logger(level="DEBUG")
    loguru_logger.add(messages.append, format="{level} {message}")

    logging.getLogger("flowloc.extraction.scanner").warning("Skipping node")

    assert any("WARNING Skipping node" in message for message in messages)


def test_level_applied():
    setup_logger(level="warning")
    std_logger = logging.getLogger("flowloc")

    assert std_logger.level == logging.WARNING
    assert isinstance(std_logger.handlers[0], InterceptHandler)
    assert not std_logger.propagate


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "flowloc.log"
    setup_logger(level="INFO", log_file=str(log_file))

    logging.getLogger("flowloc.core.pipeline").info("Job done")
    loguru_logger.remove()

    assert "Job done" in log_file.read_text(encoding="utf-8")


def test_get_logger_wraps_loguru():
    messages = []
    loguru_logger.add(messages.append, format="{message}")

    wrapper = get_logger("flowloc.cli")
    wrapper.info("hello")

    assert isinstance(wrapper, LoguruWrapper)
    assert any("hello" in message for message in messages)
