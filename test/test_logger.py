"""Tests for logger setup."""

import logging
import logging.handlers

import pytest

from upload_folder.utils.logger import get_logger, setup_logger


@pytest.fixture
def logger_name():
    """Use a dedicated logger so tests do not disturb upload_folder."""
    name = "upload_folder_test_logger"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_console_only_by_default(logger_name):
    logger = setup_logger(name=logger_name)

    assert logger.level == logging.INFO
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]


def test_file_handler_creates_directory(logger_name, tmp_path):
    log_file = tmp_path / "logs" / "run.log"

    logger = setup_logger(name=logger_name, log_file=str(log_file), log_level="debug")
    logger.debug("hello")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_repeated_setup_replaces_handlers(logger_name, tmp_path):
    setup_logger(name=logger_name, log_file=str(tmp_path / "first.log"))
    logger = setup_logger(name=logger_name, log_level="WARNING")

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)


def test_third_party_loggers_quiet_unless_debug(logger_name):
    setup_logger(name=logger_name, log_level="INFO")
    assert logging.getLogger("botocore").level == logging.WARNING

    setup_logger(name=logger_name, log_level="DEBUG")
    assert logging.getLogger("botocore").level == logging.DEBUG

    setup_logger(name=logger_name, log_level="INFO")


def test_get_logger_default_name():
    assert get_logger().name == "upload_folder"
    assert get_logger("upload_folder.r2_client").parent.name == "upload_folder"
