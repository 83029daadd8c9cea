"""Logging configuration for the RPE calculator."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import log_file as config_log_file
from .config import log_level as config_log_level

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = "rpecalc",
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    console: bool = True
) -> logging.Logger:
    """Configure and return the application logger.

    Args:
        name: Logger name (default: "rpecalc")
        level: Log level name. Falls back to LOG_LEVEL, then INFO.
        log_file: Path to a rotating log file. Falls back to LOG_FILE;
            when neither is set only the console is used.
        console: Whether to log to stdout (default: True)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(level="DEBUG", log_file="logs/rpecalc.log")
        >>> logger.info("Calculator started")
    """
    level_name = (level or config_log_level()).upper()
    log_file = log_file or config_log_file()

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Re-running setup (Shiny reloads) must not stack handlers
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


logger = setup_logger()
