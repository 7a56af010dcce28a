import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .config import get_settings

LOGGER_NAME = "beverage_shop"


def setup_logger(settings=None):
    """
    Configure the application logger once.

    Console output plus a log file rotated at midnight (7 days kept).
    Calling it again returns the already configured logger, which matters
    because Streamlit re-executes the app script on every interaction.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = TimedRotatingFileHandler(
        filename=log_dir / "beverage_shop.log",
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.info("Logger initialized (level=%s)", settings.log_level)
    return logger
