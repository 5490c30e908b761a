"""Tests for logger setup."""

import logging

from movienight.log import configure_logging, get_logger


class TestGetLogger:
    def test_cached(self):
        assert get_logger("movienight.example") is get_logger("movienight.example")

    def test_no_handlers_of_its_own(self):
        logger = get_logger("movienight.example")
        assert logger.handlers == []
        assert logger.propagate
        assert logger.level == logging.NOTSET


class TestConfigureLogging:
    def test_adds_one_console_handler(self):
        logger = configure_logging(logging.DEBUG, namespace="movienight_test_console")
        configure_logging(logging.WARNING, namespace="movienight_test_console")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
