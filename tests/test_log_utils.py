import logging
import logging.handlers

import pytest
from rich.logging import RichHandler

from update_versions import log_utils
from update_versions.constants import LOG_FILE_NAME

pytestmark = [pytest.mark.unit, pytest.mark.infrastructure]


@pytest.fixture(autouse=True)
def _restore_logger():
    """Restore the logger's level and handlers after each test."""
    logger = log_utils.logger
    level = logger.level
    handlers = list(logger.handlers)
    handler_levels = [h.level for h in handlers]
    yield
    for handler in logger.handlers[:]:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler, handler_level in zip(handlers, handler_levels):
        handler.setLevel(handler_level)
    logger.setLevel(level)
    log_utils._file_handler = None


def test_logger_uses_rich_handler_without_propagation():
    logger = log_utils.logger

    assert logger.name == "update_versions"
    assert logger.propagate is False
    assert any(isinstance(h, RichHandler) for h in logger.handlers)


def test_set_log_level():
    log_utils.set_log_level("debug")

    assert log_utils.logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in log_utils.logger.handlers)


def test_invalid_log_level_keeps_current_level():
    log_utils.set_log_level("WARNING")

    log_utils.set_log_level("LOUD")

    assert log_utils.logger.level == logging.WARNING


def test_add_file_logging_writes_file(tmp_path):
    log_dir = tmp_path / "logs"

    log_utils.add_file_logging(log_dir, "INFO")
    log_utils.logger.info("hello from the test")
    for handler in log_utils.logger.handlers:
        handler.flush()

    content = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "hello from the test" in content


def test_add_file_logging_replaces_previous_handler(tmp_path):
    log_utils.add_file_logging(tmp_path / "a")
    log_utils.add_file_logging(tmp_path / "b")

    file_handlers = [
        h
        for h in log_utils.logger.handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1


def test_invalid_file_level_defaults_to_info(tmp_path):
    log_utils.add_file_logging(tmp_path, "NOPE")

    assert log_utils._file_handler.level == logging.INFO
