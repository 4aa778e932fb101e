"""
Tests for the package logger setup
"""
import logging

import pytest

from symbolic_schemes import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("symbolic_schemes")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    for h in logger.handlers:
        h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestSetupLogging:
    def test_string_level(self, package_logger):
        logger = setup_logging("debug")
        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup_does_not_stack_handlers(self, package_logger):
        setup_logging(logging.INFO)
        setup_logging(logging.INFO)
        assert len(package_logger.handlers) == 1

    def test_log_file(self, package_logger, tmp_path):
        log_file = tmp_path / "schemes.log"
        logger = setup_logging(logging.INFO, log_file=str(log_file))
        assert len(logger.handlers) == 2
        logging.getLogger("symbolic_schemes.covering").info("glueing graph rebuilt")
        for h in logger.handlers:
            h.flush()
        assert "glueing graph rebuilt" in log_file.read_text()

    def test_default_level(self, package_logger, monkeypatch):
        from symbolic_schemes import config
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")
        assert setup_logging().level == logging.ERROR
