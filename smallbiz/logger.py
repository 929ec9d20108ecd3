import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from . import settings


def setup_logger(
    name: Optional[str] = None,
    log_level: Optional[int] = None,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Configures a logger for a session: a clean console stream for the report
    tables plus, unless disabled, a rotating file under settings.LOG_DIR.

    The level defaults to settings.LOG_LEVEL. Calling this twice for the same
    name returns the already configured logger untouched.
    """
    if log_level is None:
        log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Only this logger's own handlers count; the root may already have some.
    if logger.handlers:
        return logger

    # Tables and summaries are printed through the logger, keep them unprefixed
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_to_file:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.LOG_DIR / "app.log",
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
