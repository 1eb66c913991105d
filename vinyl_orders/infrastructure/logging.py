"""
Logging infrastructure.

Provides logging utilities for the infrastructure and API layers.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually module name)
        level: Level applied when the logger is first configured

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process (API entry point)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
