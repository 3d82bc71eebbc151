"""Logging configuration for the prediction-market options engine.

Records carry the spot and expiration of the chain they describe, so a
log line can be traced back to the chain that produced it.
"""

import logging
import sys
from typing import Optional
from pathlib import Path

ROOT_LOGGER_NAME = "prediction_options"

DEFAULT_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - [spot=%(spot)s exp=%(expiry)s] - %(message)s'
)


class ChainContextFilter(logging.Filter):
    """Fill in spot/expiry on records logged without chain context.

    Chain-level records pass them through `extra`; everything else is
    stamped with '-' so DEFAULT_FORMAT never fails on a missing field.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "spot"):
            record.spot = "-"
        if not hasattr(record, "expiry"):
            record.expiry = "-"
        return True


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the pricing engine.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, logs only to console.
        log_format: Optional custom log format string. The spot and expiry
            fields are always available to it.

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(log_level="DEBUG", log_file="logs/chain.log")
        >>> logger.info("Building chain for spot %s", 62.0)
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    logger.handlers.clear()

    formatter = logging.Formatter(log_format or DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    context = ChainContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Optional logger name. If None, returns the package root logger.

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger("chain")
        >>> logger.debug("Pricing strike %s", 52.5)
    """
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
