import logging

from rich.logging import RichHandler

from ui_quality.log import APP_LOGGER_NAME, init_logger


def test_init_logger_replaces_handlers():
    init_logger("info")
    logger = init_logger("debug")

    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
