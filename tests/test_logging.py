"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from arch_insight.logging_config import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    handlers, level, propagate = saved
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging().level == logging.WARNING
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(verbose=True, quiet=True).level == logging.ERROR

    def test_repeated_calls_replace_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_root_logger_untouched(self):
        root_handlers = list(logging.getLogger().handlers)
        setup_logging(verbose=True)
        assert logging.getLogger().handlers == root_handlers

    def test_log_file(self, tmp_path):
        path = tmp_path / "run.log"
        logger = setup_logging(log_file=str(path))
        get_logger("arch_insight.graph").warning("cycle found")
        for handler in logger.handlers:
            handler.flush()
        assert "arch_insight.graph - WARNING - cycle found" in path.read_text()


class TestGetLogger:
    def test_names_are_rooted(self):
        assert get_logger().name == "arch_insight"
        assert get_logger("arch_insight.ddd").name == "arch_insight.ddd"
        assert get_logger("plugins").name == "arch_insight.plugins"
