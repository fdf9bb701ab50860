import logging

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER_NAME = "ui_quality"


def init_logger(log_level="WARNING", console=None):
    """
    Initialize the package logger with a rich console handler.

    Existing handlers on the package logger are replaced, so calling this
    more than once does not duplicate output.

    Args:
        log_level: Level name or number (default: WARNING)
        console: Optional rich Console to write to (default: stderr)

    Returns:
        logging.Logger: The configured package logger
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    handler.setLevel(log_level)
    logger.addHandler(handler)

    return logger
