"""
Logging configuration for the tokenview service
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(logger_name: str = "tokenview", log_level: str = "INFO") -> logging.Logger:
    """
    Set up console logging for the package logger.

    Args:
        logger_name: Name of the logger to configure
        log_level: Level name, e.g. "DEBUG" or "INFO"

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove any existing handlers so repeated setup does not duplicate output
    logger.handlers = []
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    return logger
